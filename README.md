# rusmorph

Building blocks for a dictionary-based Russian morphological analyser.

The package holds:

- `rusmorph.defs` — grammatical flag constants (`GF_*`, `VT_*`, `VB_*`,
  `VF_*`, `WF_*`, `AF_*`, `SF_*`), the error codes, the `GramInfo` and
  `LemmInfo` records, and `MorphError` with `raise_for_code`, which returns a
  non-negative result unchanged and raises `MorphError` for a negative code.
- `rusmorph.stems` — `StemInfo`, a result record that carries a stem length
  and an inflexion class instead of a lexeme id; `StemInfo.stem()` returns the
  stem part of its lemma.
- `rusmorph.serial` — the compact binary encoding used by the tables:
  `write_size`/`read_size` (7 bits per byte), `write_u16`/`read_u16`
  (little-endian) and `write_string`/`read_string` (length-prefixed, text
  encoded as cp1251).
- `rusmorph.interchange` — `Interchange`, `Conditions`, `Collector` and
  `parse_tabindex`, which gather stem-interchange (alternation) tables and
  serialize them.
- `rusmorph.makeich` — the stem-interchange table compiler: `Source`,
  `make_tab`, `compile_source` and the `main` command.
- `rusmorph.alternator` — `Alternator` and `Alt`, which load compiled
  interchange references and pick the interchange table for a stem, plus the
  helpers `map_mix_type`, `stem_has_tail`, `get_default_str`,
  `get_min_max_char` and `find_in_table`.
- `rusmorph.lresolve` — `MorphClass` (with `buf_len` and `serialize`),
  `LexemeInfo`, and helpers that read dictionary articles: `type_code`,
  `lex_flags`, `get_postfix`, `case_scale`, `get_remark`, `reflexive`.

## Installing

```
pip install .
```

## Compiling interchange tables

```
rusmorph-makeich [-w] inputname binaryname symbolsname
```

The source is read as code page 866 by default; `-w` reads it as
Windows-1251. Sources are made of `.table` (or `.таблица`) blocks; each line
inside the braces is a condition followed by at least two fragments, with
`''` for an empty fragment:

```
.table 1a, 2b
{
  о   ''   о
  ге  е    ''
}
```

A source may pull in other files with `.include name` (or `.включить name`),
named relative to the including file. `binaryname` receives the interchange
tables and `symbolsname` the table-name references. Errors are reported on
standard error with the file name and line, and the command returns a
non-zero status.

## Using the library

Building tables in code:

```python
from rusmorph.interchange import Collector, Interchange

inter = Interchange()
inter.add_step("е", 0)
inter.add_step("", 1)

tables = Collector()
tables.add_interchange("1a", "о", inter)
tables.relocate_tables()

binary = tables.store_tab()
references = tables.store_ref()
```

Reading them back and choosing an interchange for a stem:

```python
from rusmorph.alternator import Alternator

alternator = Alternator.load(references)
offset = alternator.find(binary, "1a", 7, "пене")  # 0 when nothing fits
```

Reading a dictionary comment:

```python
from rusmorph.lresolve import get_postfix, lex_flags

get_postfix("post: то")   # "то"
lex_flags("{разг.}")      # WF_INFORMAL
```

## What the package does not do

It does not analyse words: there is no lemmatizer, form builder or word
checker, and no compiled dictionary ships with it. `lresolve` gives the
pieces for reading dictionary articles, but there is no command that builds
a dictionary from them; `rusmorph-makeich` is the only command.

## Running the tests

```
pip install .[test]
pytest
```