# windengine

Building blocks for a small game engine:

- **Asset pipeline** (`windengine.assets.bundler`): walks a source directory
  that `.export-config` files describe. Each file is compiled through a
  *pipe* (`default`, `image`, `shader` or `copy`) into a cache. The results
  are then linked into binary `.bundle` files or exported as plain
  directories.
- **Asset manager** (`windengine.assets.manager`): opens bundles and loads
  assets back by name.
- **Input system** (`windengine.input`): keycodes, key actions, keyboard and
  mouse state, and named triggers that run callbacks when one of their bound
  keys is dispatched.

Progress and errors are reported through the standard `logging` module.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Building bundles

`AssetBundler(register, workdir)` works relative to `workdir`, which is
usually your game's `data/` directory. Calling `build(source)` does the
following:

- keeps its cache in `workdir/.cache/<source name>`;
- removes cache entries whose source file is gone;
- processes `source`;
- links every `*.bundle` directory in the cache into a bundle file under
  `workdir/../res`;
- copies every `*.directory` directory in the cache to `workdir/../res`
  without the `.directory` suffix.

`build` returns the output directory.

```python
from windengine.assets.bundler import AssetBundler
from windengine.assets.pipes import bundler_register

output = AssetBundler(bundler_register(), "data").build("textures")
```

A directory is processed only if it holds an `.export-config` file, for
example:

```yaml
output:
  path: textures
  type: bundle
preprocessing:
  execute: echo preparing
exports:
  - path: ".*\\.png"
    pipe: image
  - path: ".*\\.txt"
    pipe: default
```

- `output` sets the name and kind (`bundle` or `directory`) of the cache
  directory that the compiled files go into.
- `preprocessing.execute` is run as a shell command inside the directory
  before compiling.
- Each `exports` entry is matched as a regular expression against the whole
  path of a file, relative to the directory. The first match wins, and its
  `pipe` compiles the file.
- Subdirectories matched by an entry are processed in turn. An entry may give
  them an `output` of their own.
- A file is recompiled only when it is newer than its cache file.

The pipes are:

- `DefaultPipe`: stores the bytes compressed with zlib.
- `ImagePipe`: stores decoded 8-bit pixels, using Pillow.
- `ShaderPipe`: stores the `<vtx>` and `<fgt>` sources of an XML file.
- `CopyPipe`: copies the file unchanged.

`bundler_register()` holds all four pipes. `manager_register()` holds all of
them except `copy`.

## Loading assets

```python
from windengine.assets.manager import AssetManager
from windengine.assets.pipes import manager_register

manager = AssetManager(manager_register())
manager.load_bundle("res/textures.bundle")
if manager.exists("textures/hero.png"):
    image = manager.get_asset("textures/hero.png")
manager.unload_bundles()
```

`get_asset` returns what the asset's pipe loads:

- bytes for the `default` pipe;
- an `Image` with `pixels`, `size` and `channels` for the `image` pipe;
- `None` when the asset cannot be found or loaded.

`preload(key)` keeps an asset so that later calls return the same object.

## Input triggers

```python
from windengine.input.input_system import InputSystem
from windengine.input.keys import Key, KeyAction, Keycode

inputs = InputSystem()
inputs.add_trigger("jump", Key(Keycode.K_SPACE, KeyAction.PRESSED),
                   lambda ctx: print("jump!"))
inputs.dispatch(Key(Keycode.K_SPACE, KeyAction.PRESSED))
```

Callbacks receive the system's `InputSystemContext`, which holds the keyboard
and mouse state. The other operations are:

- `add_trigger_bindings` and `add_trigger_callbacks` extend an existing
  trigger;
- `remove_trigger` takes one name or several;
- an empty `Key()` or a callback that cannot be called raises
  `InputSystemError`.

`create_triggers_from_file(manager, path)` reads a YAML asset through an
`AssetManager`. The asset holds a `triggers` list, and each entry has a
`name` and `bindings`. Each binding has a `key` (a name such as `Space`, `A`
or `Num1`) and an `action` (`Pressed`, `Held` or `Released`).

`windengine.input.keymap` converts between keycodes, their names and SDL key,
button and event codes.

## What this package does not do

- There is no command-line tool. Bundles are built by calling
  `AssetBundler.build` from Python.
- Nothing here opens windows or reads events from a device. Key events have
  to be turned into `Key` values and passed to `InputSystem.dispatch` by the
  caller.