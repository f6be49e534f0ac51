# leaderdex

`leaderdex` indexes every file in a folder and answers free-text queries
against it.

Words are runs of letters, lower-cased. An apostrophe continues a word but
cannot start one. Each document becomes a tf-idf vector. About √N of the N
documents are picked at random to be *leaders*, and every other document is
attached as a *follower* to some of them. A query is scored against a few
leaders and then against their followers. Results are ordered by cosine
similarity, highest first.

Leaders are chosen for a follower, and for a query, by sorting the leaders
by cosine similarity in ascending order and taking the first ones. So the
leaders taken are the ones with the lowest similarity.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Command line

```
leaderdex [FOLDER] [FILE_LIMIT]
```

- `FOLDER` defaults to `data/shakespeare`. Only regular files directly
  inside it are read, in name order.
- `FILE_LIMIT` caps how many files are tried. If it is not a plain
  non-negative number, it is ignored.

Files that cannot be opened, or that are not valid UTF-8, are reported and
skipped. They still count towards the limit.

The command works in this order:

1. It indexes the documents on a thread pool.
2. It prints timing, size and lexer statistics: lines, characters read and
   characters ignored.
3. It writes the index as text to `data/index.txt`. The `data` directory
   must already exist.
4. It picks leaders, attaching each follower to 2 leaders.
5. It reads queries from standard input, one per line, until it gets `q`
   or the input ends.

Each result line shows the position, the document id, the weight and the
path. A query that shares no word with the index is reported as an error.

## Library use

```python
from leaderdex.context import InfContext
from leaderdex.cluster_index import InvertedIndex, index_document

ctx = InfContext.from_directory("data/shakespeare", None)
index = InvertedIndex()
for document_id in ctx.document_ids():
    part, stats = index_document(document_id, ctx)
    index.merge(part)

index.preprocess(2, None)          # or pass a random.Random for repeatable leaders
for document_id, weight in index.query({"love", "death"}, 2):
    print(ctx.document(document_id).name(), weight)
```

`InvertedIndex.save(stream)` and `InvertedIndex.load(stream)` write and
read a text form. It holds one `id:count` line per document, then a `#`
line, then one `term|id:count,id:count,...` line per term. Leaders and
vectors are not saved, so call `preprocess` again after `load`. Until
`preprocess` has run, `query` returns an empty list.

The building blocks can also be used on their own:

- `leaderdex.lexer.lex` splits text into terms and returns a `LexerStats`.
- `leaderdex.term.TermPositions` holds the occurrence count of a term in
  each document.
- `leaderdex.encoding.vb_encode` and `leaderdex.encoding.vb_decode` handle
  variable-byte integers.

### Other index types

- `leaderdex.compressed_index.DocumentSetIndex` maps each term to the set
  of documents that contain it.
  - `save` and `load` write and read `term:id,id,...` lines.
  - `save_compressed` and `read_compressed` use a binary form: a
    front-coded, sorted term dictionary followed by variable-byte encoded
    gaps between document ids.
  - `index_document_set` builds one from a single document.
- `leaderdex.segmented_index.SegmentedIndex` records, for each term, the
  document and the segment it came from. A segment is one of the
  `SegmentKind` values: filename, title, authors, body or epigraph.
  - `index_segmented_document` reads `.fb2` files as FictionBook through
    `leaderdex.fb2.segment_fb2`. That takes the title, the authors and the
    plain paragraph text, but not styled runs. Other files are read as
    plain body text. The parts of the file's path are added as filename
    segments.
  - `to_json` gives a pretty-printed JSON form.
  - `rank_positions` groups positions by document and orders the documents
    by summed segment weight, highest first.

## What it does not do

- Only the clustered `InvertedIndex` is reachable from the command line.
  `DocumentSetIndex` and `SegmentedIndex` are library classes only.
- There is no boolean query language: no AND/OR/NOT expressions.
  `DocumentSetIndex` and `SegmentedIndex` have no query method. Use
  `term_positions` to look up a single term, and combine the sets yourself.
- `SegmentedIndex` can be written as JSON but not read back.
- Nothing in `SegmentedIndex` produces the epigraph segment kind.