# sniffcheck

An opinionated code-quality toolkit for TypeScript and Next.js projects. From
the command line it checks type quality and web performance, and it manages a
project configuration file. Reports are printed for people, or as JSON with
`--json`.

## Installation

```
pip install .
```

This installs the `sniff` command. Running the tests needs the `test` extra:

```
pip install ".[test]"
pytest
```

## Commands

Run each command from the root of the project you want to check.

```
sniff types              # find 'any' usage, @ts-ignore, @ts-expect-error, missing return types
sniff perf               # Lighthouse audit, or basic checks if Lighthouse is absent
sniff config init        # write a default sniff.toml (unless a config file already exists)
sniff config show        # print the configuration in effect
sniff config validate    # check thresholds and severity ordering
sniff config get types   # print the configuration section for one command
```

`sniff` with no command prints the help text. `sniff --version` prints the
version.

Global options, given before the command:

- `--json` prints the report as JSON.
- `--quiet` keeps the output to a minimum.

### `sniff types`

Scans every `.ts` and `.tsx` file below the working directory, skipping the
configured excluded directories and files (`large_files.excluded_dirs` and
`large_files.excluded_files`). Reported issues are grouped by kind, followed by
a summary with a rough type coverage score.

### `sniff perf`

If the `lighthouse` command is available, it looks for a running development
server (probing common local ports with TCP connections and `curl`, and looking
for `next dev`, `vite` and `ng serve` processes with `pgrep`), audits the first
server that Lighthouse can reach and reports its category scores. Otherwise, or
if the Lighthouse output cannot be read, it runs basic checks: the size of the
first build directory found (`.next`, `dist`, `build`, `out`), and whether
sources up to three levels deep use lazy loading and `next/image`.

### `sniff config get`

Accepts `large`, `types`, `imports`, `bundle`, `perf`, `memory` or `env` and
prints the matching section of the configuration as TOML.

### Exit codes

| Code | Meaning |
|------|---------|
| 0 | success |
| 1 | an error was reported (`Error: ...` on stderr), or the overall performance score is below 50 |
| 2 | `sniff types` found `any` usage or more than five TS suppressions |

## Configuration

`sniff` looks for `sniff.toml`, `sniff-check.toml`, `.sniff.toml` or
`.sniffrc.toml` in the current directory, in that order, and uses the first one
it finds. If none exists it uses built-in defaults. A configuration file must
contain every field of every section; `sniff config init` writes one with the
defaults to start from. The sections are:

- `large_files`: threshold, excluded directories and files, severity levels
- `typescript`
- `imports`
- `bundle`
- `performance`
- `memory`
- `environment`

A `--config` option is accepted but not used: the configuration is always
looked up in the current directory as described above.

## What it does not do

Only the `types`, `perf` and `config` commands exist. Although the
configuration has sections for them, there are no commands that find large
files, unused imports, bundle problems, memory leaks or missing environment
variables.

## Library use

The modules can also be used from Python:

```python
from pathlib import Path

from sniffcheck.config import Config
from sniffcheck.perf_audit import perform_audit
from sniffcheck.types_check import analyze_typescript_files

config = Config.load()
print(config.severity_for_lines(250))          # SeverityLevel.ERROR

report = analyze_typescript_files(Path("."), quiet=True)
print(report.summary.type_coverage_score)

results, summary, recommendations = perform_audit(Path("."))
print(summary.overall_score)
```

Other modules provide the pieces the commands are built from:
`sniffcheck.scanner.FileScanner` for file discovery with exclusions,
`sniffcheck.patterns` for the shared regular expressions,
`sniffcheck.jsonout.StandardResponse` for a JSON envelope with command,
timestamp, version, data and summary, `sniffcheck.report` for severity and
status values and formatting helpers, and `sniffcheck.performance` for a
filtering file walker, a cached file reader, batching and timing.