# vimbrowse

The logic behind a keyboard-driven, vim-like web browser, as a plain Python
library with no dependencies outside the standard library.

## What is in it

- **`vimbrowse.setting`**: typed settings. A `Settings` collection holds
  `Setting` objects of a `DataType` (boolean, integer or string). `Settings.run(name, param)`
  understands `:set` syntax. `name=value` sets a value. `name+=value` appends, `name^=value`
  prepends and `name-=value` removes; on integers these add, multiply and subtract.
  `name?` or a missing value shows the setting. `name!` toggles a boolean.
  String settings may be comma-separated lists (`SettingFlag.LIST`) and may refuse
  duplicates (`SettingFlag.NODUP`). A setter callable can be attached to a setting.
  It is called with the new value before the value is stored, and it rejects the value
  by raising. Unknown settings, bad toggles and missing values raise `SettingError`.
  `choice_validator(choices)` builds a setter that accepts only fixed values.
  `prepare_value` computes the result of one operation without storing it.
- **`vimbrowse.defaults`**: `default_settings(version, setters)` builds the standard
  option set (user agent, fonts, scrolling, hinting, privacy options and so on).
  Every entry of `setters` is called with the initial value and again on each change.
  `geolocation`, `notification` and `hardware-acceleration-policy` accept only their
  fixed choices. `default_shortcuts()` returns the built-in `dl` and `dd` search
  shortcuts, with `dl` as the default.
- **`vimbrowse.shortcut`**: `Shortcuts` turns input such as `dd python docs` into a
  URI. Templates use the `$0`–`$9` placeholders. A template with only `$0` gets the
  whole query. With higher placeholders the query is split at whitespace, quotes group
  words, and the last placeholder takes the rest. When the first word is not a known
  key, the default shortcut is used.
- **`vimbrowse.keyparse`**: `NormalParser` collects normal-mode keystrokes into a
  `NormalCmdInfo`. This covers counts, a `"x` register prefix, two-key commands
  (`;`, `z`, `g`, `[`, `]`, `'`, `m`) and the three-key `g;x`. `command_for(key)`
  names the command bound to a key.
- **`vimbrowse.normal`**: the pure parts of the normal-mode commands:
  - `ex_prompt` and `hint_prompt` give the command-line prompts.
  - `input_open_text` gives the text placed in the command line by `o`, `t`, `O` and `T`.
  - `scroll_script` and `jump_script` give the page scripts.
  - `increment_amount` and `search_count` give the signed counts.
  - `descent_uri` gives the URI for `gu`/`gU`.
  - `zoom_level` gives the result of `zi`, `zI`, `zo`, `zO` and `zz`.
  - `Marks` stores local and global marks.
- **`vimbrowse.textutil`**: `expand` handles `~/`, `~user`, `$VAR` and `${VAR}`.
  `wildmatch` matches comma-separated wildcard patterns with `*`, `?` and `{a,b}`.
  Also here: `casefind`, `str_replace`, `strescape`, `string_to_timespan` (in
  microseconds), `sanitize_filename` and `sanitize_uri` (drops a password from a URI).
- **`vimbrowse.fileutil`**:
  - `build_path` builds absolute paths and creates the parent directories.
  - `file_set_content` writes a file atomically.
  - `file_append` and `file_prepend` write under a lock.
  - `file_prepend_line` and `file_pop_line` work on line-based history files.
  - `unique_items` reduces tab-separated lines to one item per key, keeping the latest.
  - `fill_completion` and `filename_completion` produce completion candidates.
  - `config_dir`, `data_dir` and `cache_dir` give per-profile directories.

## Installing

```
pip install .
```

## Examples

```python
from vimbrowse.shortcut import Shortcuts

sc = Shortcuts()
sc.add("dd", "https://duckduckgo.com/?q=$0")
sc.set_default("dd")
sc.get_uri("dd hello world")   # 'https://duckduckgo.com/?q=hello%20world'
```

```python
from vimbrowse.defaults import default_settings

settings = default_settings("3.7.0")
settings.run("scroll-step", "60")   # None
settings.get("scroll-step")         # 60
settings.run("caret!", None)        # '  caret=true'
settings.run("scroll-step?", None)  # '  scroll-step=60'
```

```python
from vimbrowse.keyparse import NormalParser

parser = NormalParser(register_chars="abc")
parser.keypress("2")           # None: more keys are needed
info = parser.keypress("j")    # NormalCmdInfo(count=2, key='j', ...)
info.command                   # 'scroll'
```

```python
from vimbrowse.normal import descent_uri
from vimbrowse.textutil import wildmatch

descent_uri("https://example.com/a/b/c", "u", 1)   # 'https://example.com/a/b/'
descent_uri("https://example.com/a/b/c", "U", 1)   # 'https://example.com/'
wildmatch("*.example.com/*", "www.example.com/index.html")  # True
```

## What it does not do

This package has no window, no web engine and no command to start a browser. It does
not render pages, run scripts in them or talk to a page process. The functions in
`vimbrowse.normal` only return prompts, script text, URIs and zoom levels. Applying
them to a page is left to the caller. In the same way, the setters passed to
`default_settings` are where a host program would apply each value. History,
bookmarks and closed-page lists are not managed here. `vimbrowse.fileutil` only
provides the file operations such lists are built on.

## Running the tests

```
pip install .[test]
pytest
```