# bulkasync

`bulkasync` groups incoming commands into *bulks*. Each finished bulk goes to
a small pool of worker threads. The workers print the bulk to standard output
and append it to a log file.

## Installation

```
pip install .
```

To install the test tools as well:

```
pip install .[test]
```

## Bulk rules

- A context is opened with a bulk size `N`.
  - Once `N` commands have been collected outside a dynamic block, they are
    emitted as one bulk.
  - A bulk size of `0` never emits by size.
  - A negative size raises `ValueError`.
- The command `{` opens a dynamic block.
  - Any commands collected so far are emitted first.
  - After that, commands are collected until the matching `}`, however many
    there are.
- Blocks can be nested. Only the outermost `}` ends the block and emits the
  bulk.
- A `}` that arrives outside any block is ignored.
- When a context is flushed or disconnected, any pending commands are
  emitted. This includes the commands of a dynamic block that was never
  closed.

Each bulk is written as a single line:

```
bulk: cmd1, cmd2, cmd3
```

A `Logger` writes every bulk it receives to one file, `bulk<timestamp>.log`,
in its directory. The directory is the current directory by default. The
`<timestamp>` is the second, in Unix time, at which the first bulk was
emitted. Every later bulk is appended to that same file.

## Library use

```python
from bulkasync.bulk import connect, receive, disconnect

ctx = connect(3)
for command in ["cmd1", "cmd2", "cmd3", "{", "cmd4", "cmd5", "}"]:
    receive(ctx, command)
disconnect(ctx)
```

How connections behave:

- `receive` accepts either `str` or `bytes`; bytes are decoded as UTF-8.
- Several contexts can be open at the same time. They all share one worker
  pool, which has three threads.
- When the last context is disconnected, the pool logs every bulk still
  queued. It then stops and its worker threads are joined.
- Passing an unknown or already disconnected context to `receive` or
  `disconnect` raises `InvalidContextError`, a subclass of `LookupError`.

The building blocks in `bulkasync.bulk` can also be used on their own.

`BulkData`
: A list of commands plus a timestamp. `format()` returns the `bulk: ...` line.

`Logger(directory=".", stream=None)`
: Provides `log_to_console(data)` and `log_to_file(data)`. Console output goes
  to `stream`, or to standard output when no stream is given.

`LoggerPool(logger, num_threads=3)`
: Worker threads that pass queued bulks to the logger.
  - Send bulks with `enqueue(data)`.
  - `stop()` drains the queue and joins the threads.
  - The pool is a context manager that stops on exit.
  - Calling `enqueue` after `stop()` raises `RuntimeError`.

`BulkContext(bulk_size, pool)`
: Applies the bulk rules above.
  - Feed it with `process_command(command)`; call `flush()` to emit what is
    pending.
  - `pending` holds the collected commands.
  - `in_dynamic_block` tells whether a block is open.

## Command line

```
bulkasync [-n BULK_SIZE] [--delay SECONDS] [COMMAND ...]
```

The command opens one context and sends the given commands to it. It waits
`--delay` seconds (default 1.0) and then disconnects. The bulk size
defaults to 3.

Without commands, it sends a demonstration sequence:

```
cmd1 cmd2 cmd3 { cmd4 cmd5 } cmd6 cmd7
```

Negative values for `--bulk-size` or `--delay` are rejected.

## What it does not do

Commands come only from the command-line arguments or from calls to
`receive`. The package does not read commands from standard input or from a
network connection.