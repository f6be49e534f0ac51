[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "leaderdex"
version = "0.1.0"
description = "Inverted-index search over a folder of text files, with tf-idf leader/follower clustering, compressed and segmented index variants."
requires-python = ">=3.10"
keywords = ["inverted index", "search", "tf-idf", "information retrieval", "variable byte encoding", "fictionbook"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Indexing",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
leaderdex = "leaderdex.cli:main"

[tool.setuptools.packages.find]
include = ["leaderdex*"]

[tool.pytest.ini_options]
addopts = "-ra"
