# sotaller

A set of small, runnable operating-systems exercises written with Python's
standard library: threads, semaphores, named pipes (FIFOs), signal handling,
syslog logging, chunked file I/O and the banker's algorithm for deadlock
avoidance.

Most exercises target Linux/POSIX, because they rely on FIFOs, `syslog` and
POSIX signals. Their messages are in Spanish, as in the workshops they come
from.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Banker's algorithm

`sotaller.banker.Banker` holds the available vector and the maximum and
allocated matrices, derives the need matrix, checks whether the system is in
a safe state and evaluates resource requests, rolling back any request that
would leave the system unsafe.

A system description is a YAML file such as:

```yaml
processes: 5
resources: 3
vectors:
  availables: [3, 3, 2]
  max:
    - [7, 5, 3]
    - [3, 2, 2]
    - [9, 0, 2]
    - [2, 2, 2]
    - [4, 3, 3]
  allocated:
    - [0, 1, 0]
    - [2, 0, 0]
    - [3, 0, 2]
    - [2, 1, 1]
    - [0, 0, 2]
```

```python
from sotaller.banker import Banker, RequestOutcome

banker = Banker.from_file("system.yaml")
banker.is_safe()                   # True
banker.format_safe_sequence()      # "1 3 4 0 2 \n"
outcome = banker.evaluate_request(1, [1, 0, 2])
print(outcome.message)
```

- `Banker.from_file(path)` and `Banker.from_mapping(data)` raise
  `BankerError` (with a `Reason`) when the file cannot be opened or the
  description is malformed.
- `is_safe(out=None)` runs the safety algorithm; pass a text stream as `out`
  to get a step-by-step trace of the `finish` and `work` vectors.
- `evaluate_request(process, request, out=None)` returns a `RequestOutcome`:
  `EXHAUSTED`, `MUST_WAIT`, `UNSAFE` (the request was rolled back) or
  `GRANTED`.
- `format_matrices()` renders the allocated, max, need and available tables.

## Synchronisation exercises

| Command | What it shows |
| --- | --- |
| `sotaller-v3` | Staged launcher: one thread per stage, coordinated with semaphores |
| `sotaller-garden` | Ornamental garden: visitor threads sharing a counter guarded by a mutex semaphore |
| `sotaller-garden-limited` | The same garden with a counting semaphore capping how many visitors are inside |
| `sotaller-smokers` | Cigarette smokers problem: an agent and three smokers (`-a`, `-c`, `-p`, `-t` rename the semaphores); runs until interrupted |
| `sotaller-threads N` | Starts `N` threads and collects the value each one returns |

The building blocks are importable too: `sotaller.v3.V3Launcher` (a context
manager), `sotaller.garden.Garden` and `LimitedGarden`,
`sotaller.garden_sim.run_simulation`, and `sotaller.smokers.SmokersTable`
with `run_agent` and `run_smoker`.

## Named pipes

A counter server hands out consecutive numbers from one of three queues over
a pair of FIFOs (`/tmp/tuberia_peticion` and `/tmp/tuberia_solicitud`).

```
sotaller-pipe-create
sotaller-pipe-server
sotaller-pipe-client 1
sotaller-pipe-remove
```

`sotaller-pipe-create` and `sotaller-pipe-remove` also accept two paths to
use instead of the defaults. `sotaller-pipe-client` takes the queue number
(taken modulo 3); the server answers with the client's process id and the
next number in that queue. The message formats are available as
`format_request`, `parse_request`, `format_response` and `parse_response` in
`sotaller.named_pipes`, and the server as `sotaller.pipe_server.CounterServer`.

## Services and signals

| Command | What it shows |
| --- | --- |
| `sotaller-echo-service` | Service that reads lines from a FIFO and answers them with the letter case inverted, logging each exchange to syslog and `/tmp/servicio1.log` |
| `sotaller-echo-client` | Interactive client for the echo service (Ctrl+D to quit) |
| `sotaller-service2` | Service that logs a step every ten seconds and stops after receiving five signals |
| `sotaller-systemd-service` | Long-running service that logs a step every minute and stops on SIGTERM |
| `sotaller-capture-signal` | Counts SIGINT presses and stops after the fourth |

## Files

| Command | What it shows |
| --- | --- |
| `sotaller-show-file [PATH]` | Copies a file to standard output in twelve-byte reads |
| `sotaller-upper` | Filters standard input to standard output, upper-casing ASCII letters |

`sotaller.file_io` also offers `read_chunks`, `show_file`, `upper_filter` and
`open_error_message`.

## What the package does not do

- The banker's algorithm is a library only: there is no command that loads
  a description and asks for requests interactively.
- There are no exercises for creating child processes, connecting programs
  with an anonymous pipe, signalling child processes, turning a process into
  a daemon or writing a fixed series of syslog events.