# kresilience

Checkpoint and restart for long-running, iterative computations.

You wrap each step of a loop in `checkpoint`. When a checkpoint for that
label and iteration already exists, its saved data is loaded back instead
of running the step again; otherwise the step runs and its data is written
out. A program that is stopped and started again therefore resumes where it
left off.

The package has no dependencies outside the standard library.

## Install

```
pip install kresilience
```

For running the test suite:

```
pip install "kresilience[test]"
pytest
```

## Configuration

A context is built from a `Config` (`kresilience.config`), read from a JSON
file with `Config(path)` or built from nested dictionaries with
`Config.from_mapping(...)`:

```json
{
  "backend": "stdfile",
  "backends": { "stdfile": { "file": "data/run" } },
  "filter": { "type": "iteration", "interval": 10 }
}
```

Only objects, strings and numbers are kept when a configuration is read.
Numbers are stored as floats; booleans, arrays and nulls in the JSON are
dropped.

* `backend`: which storage to use. The only one is `stdfile`, which writes
  one file per checkpoint, named `<file>.<label>.<iteration>`.
* `filter` (optional): which iterations are checkpointed.
  * `default`: every iteration.
  * `iteration`: iterations that are a multiple of `interval`.
  * `time`: an iteration is checkpointed when more than `interval` seconds
    (whole seconds) have passed since the last checkpoint, or since the
    context was created.

An unknown filter type raises `ValueError` when the context is created.

Lookups go through `ConfigEntry` objects: `cfg["backends"]["stdfile"]["file"]`
returns an entry, and `entry.as_type(str)` returns its value, which must be
of exactly that type. A missing key raises `ConfigKeyError`; asking for a
value of the wrong type, or for the value of an object, raises
`ConfigValueError`. `get(key)` returns `None` instead of raising when the
key is absent.

## Usage

```python
from kresilience.config import Config
from kresilience.factory import make_context
from kresilience.checkpoint import Member, checkpoint, latest_version

cfg = Config.from_mapping({
    "backend": "stdfile",
    "backends": {"stdfile": {"file": "data/run"}},
})
ctx = make_context(cfg)

state = Member("state", [0.0] * 25)

def step():
    state.value[:] = [x + 1.0 for x in state.value]

start = latest_version(ctx, "step") + 1
for i in range(start, 100):
    checkpoint(ctx, "step", i, step, state)
```

* `make_context` accepts a `Config` or the path of a JSON file and returns
  `None` when the `backend` entry names no known backend.
* `latest_version` returns the highest version found on disk for a label,
  or `-1` when there is none.
* Members are found automatically among the closure variables of the step
  function (or the attributes of a callable object): `Member` objects and
  mutable lists, dicts and sets count. Explicit members can be passed after
  the function, as above. Containers are restored in place, so references
  held elsewhere see the restored data.
* A different filter for one call is given with the `filter=` keyword, for
  instance `filter=NthIterationFilter(5)` from `kresilience.filters`
  (`DefaultFilter` and `TimeFilter` are there too). Iterations the filter
  rejects just run the function.
* Members are written with `pickle`, in order of their names. Only restart
  from checkpoint files you trust.
* Errors while writing or reading a checkpoint file are logged through the
  `logging` module, not raised. The start of each checkpoint is logged at
  INFO level.

`kresilience.handlers` holds a process-wide hook for unrecoverable data
corruption: `set_unrecoverable_data_corruption_handler(handler)` installs a
callable taking an index, and `get_unrecoverable_data_corruption_handler()`
returns it. The default handler raises `UnrecoverableDataCorruption`. Nothing
in the package calls it; it is there for applications to use.

## Demo

```
kresilience-demo
```

reads `config_file.json` from the current directory (another file can be
given with `--config PATH`) and checkpoints a 5 x 5 array that is filled
with `3.0`, under the label `test_checkpoint` at iteration 0. If that
checkpoint exists already the array is restored from it instead. It exits
with status 1 when the configuration names an unknown backend.

## What it does not do

* File storage on the local file system is the only backend. There is no
  storage for distributed or multi-process runs, and no coordination
  between processes.
* Registration and aliases are only recorded by the file backend; they do
  not change what is written.
* There is no execution of work in redundant copies with majority voting;
  only the handler hook for it is provided.