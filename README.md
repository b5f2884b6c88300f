# portwatch

portwatch checks a list of hosts for open TCP ports. It keeps the result of the
previous run in a snapshot file and reports any ports that have opened or closed
since then.

## Installing

```
pip install .
```

The package uses only the standard library. To run the tests, install the
`test` extra:

```
pip install ".[test]"
pytest
```

## Running

```
portwatch [CONFIG]
```

`CONFIG` is the path to a JSON configuration file. It defaults to
`portwatch.toml` in the current directory, but the contents are always read as
JSON. If the file is missing, cannot be read or fails validation, a warning goes
to standard error and the built-in defaults are used: host `localhost`, ports
22, 80, 443 and 8080, a 2-second timeout, and the snapshot file
`portwatch_snapshot.json`.

A configuration file looks like this:

```json
{
  "hosts": ["localhost", "192.168.1.1"],
  "ports": [22, 80, 443],
  "snapshot_path": "portwatch_snapshot.json",
  "timeout_seconds": 2
}
```

Validation rules (`Config.validate`):

- There must be at least one host.
- There must be at least one port, and every port must be between 1 and 65535.
- If `timeout_seconds` is missing or not positive, it is set to 2.
- If `snapshot_path` is empty, it is set to `portwatch_snapshot.json`.

A `history_dir` key is also read into `Config.history_dir`. The command itself
does not use it; `watchdog.from_config` does.

Each run connects to every configured port on every host, one after another.
A port counts as open when a TCP connection succeeds within the timeout.

- If there is no snapshot file yet (or it cannot be read), the command prints
  `no previous snapshot found, saving baseline` and saves the scan.
- Otherwise it compares the scan with the snapshot and prints one line per
  opened port at level `ALERT` and one per closed port at level `WARN`, for
  example `[2024-05-01T12:00:00+02:00] ALERT Port opened: 8080/tcp ()`. If
  nothing changed it prints a single `INFO` line, `No port changes detected.`
  Then it saves the new scan over the old snapshot.

If a run fails (for instance the snapshot cannot be written), the error is
printed to standard error as `error: ...` and the exit status is 1.

## Library use

- `portwatch.scanner`: `Scanner(timeout).scan(host, ports)` returns a
  `ScanResult` of `PortState` entries; `open_ports()` keeps the open ones. An
  empty host raises `ValueError`. A timeout of zero or less means no timeout.
- `portwatch.snapshot`: `diff(prev, next)` returns a `DiffResult` whose
  `opened` and `closed` lists hold sorted port numbers. Either side may be a
  `Snapshot`, a `ScanResult`, an iterable of `ScanResult` or `PortState`, or
  `None`. `open_ports(results)` lists open port numbers. `Snapshot.create`,
  `save(path, snap)` and `load(path)` store snapshots as JSON; `load` returns
  `None` when the file does not exist.
- `portwatch.config`: `Config`, `default_config()`, `load(path)` (which
  validates) and `ConfigError`, a `ValueError`.
- `portwatch.alert.Notifier`: writes one timestamped line per change and
  returns the `Alert` objects; levels are in the `Level` enum.
- `portwatch.notifier.Notifier` and `MultiNotifier`: write a
  `[portwatch] changes detected on HOST` summary to one or several streams, and
  nothing when there are no changes.
- `portwatch.reporter.Reporter`: writes a timestamped `Port scan report`.
- `portwatch.audit.AuditLogger`: writes one JSON object per line with the
  host, opened and closed ports and a short message from `build_message`.
- `portwatch.baseline`: `Manager(directory)` saves, loads and deletes an
  approved baseline per host (`HOST.baseline.json`, with `:`, `/` and `\`
  replaced by `_` via `sanitize`). `compare(baseline, live)` returns a
  `Deviation` with `extra` and `missing` ports, or `None` when there is no
  baseline or no difference.
- `portwatch.filtering.PortFilter(include, exclude)`: keeps results whose port
  is not excluded and, if an include list is given, is in it.
- `portwatch.policy`: `Policy` holds ordered `Rule`s with an `allow` or `deny`
  action; the first matching rule decides, and no match means allow.
  `default_policy()` allows everything.
- `portwatch.grouping.Registry`, `portwatch.labels.Labels` and
  `portwatch.tags.Tags`: thread-safe host groups, host labels, and host tags
  (with surrounding whitespace stripped).
- `portwatch.history.History(directory)`: `record(host, results)` writes a
  JSON file named after the host and the UTC time and returns its path.
- `portwatch.metrics`: `Collector` counts scans and the latest open-port count
  and duration; `print_metrics(stream, snapshot)` writes an aligned table and
  `format_duration` renders durations such as `42ms` or `1m30s`.
- `portwatch.exporter`: `ScanMetrics` counts scans with their open and closed
  ports; `Exporter(metrics).export(stream)` writes them as indented JSON.
- `portwatch.ratelimit.Limiter`, `portwatch.suppress.Suppressor` and
  `portwatch.throttle.Throttle`: per-key cooldowns that let one event through
  per interval; each takes an injectable clock. `Throttle.next_allowed` gives
  the earliest next scan time.
- `portwatch.retry.Doer`: `do(fn)` calls `fn` up to `max_attempts` times with a
  delay between attempts, returns its value on success and raises
  `MaxAttemptsError` otherwise.
- `portwatch.resolve.Resolver`: `resolve(host)` returns a `Resolution`; IP
  addresses are returned unchanged, names are looked up with a timeout.
  `primary(host)` returns the first address. Failures raise `ResolveError`.
- `portwatch.scheduler.Scheduler(interval, job)`: `run(stop)` runs the job at
  once and then every interval until the `threading.Event` is set, logging but
  surviving job errors, and returns the number of runs.
- `portwatch.watchdog`: `Watchdog.run(hosts, ports)` scans, records metrics,
  diffs against and updates a snapshot file, calls its notifiers and writes a
  history record. `from_config(cfg, logger)` builds one that prints alerts and
  reports to standard output.

## What it does not do

- The `portwatch` command scans once and exits. It has no daemon or repeat
  mode; to scan on a schedule, drive a `Watchdog` or your own job with
  `Scheduler`, or run the command from an external scheduler.
- Configuration is JSON only; no TOML is parsed, whatever the file name.
- Only TCP connect checks are made. There is no UDP scanning and no service
  detection, so the service shown in alerts is empty.
- Reports go to text streams only. There is no e-mail, webhook or other
  delivery.