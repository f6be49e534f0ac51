"""Inverted-index search over folders of text files: a tf-idf leader/follower index with a command line, plus document-set and segmented index variants."""

__version__ = "0.1.0"