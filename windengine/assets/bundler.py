"""Building asset bundles from directories described by export configs."""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
from pathlib import Path
from typing import Any

import yaml

from windengine.assets.pipe import ASSET_ID, AssetPipe, PipeRegister, asset_hash
from windengine.assets.pipes import bundler_register
from windengine.utils import (
    Stopwatch,
    remove_first_directory,
    replace_all,
    yaml_error,
    yaml_warn,
)

logger = logging.getLogger(__name__)

CACHE_EXTENSION = ".wind-asset-cache"
CONFIG_NAME = ".export-config"


class AssetBundlerError(Exception):
    """Raised when a directory cannot be walked by the bundler."""


class _MarkedDict(dict):
    """A mapping that remembers where it starts in its YAML document."""

    start_mark = None


class _ConfigLoader(yaml.SafeLoader):
    pass


def _construct_marked_mapping(loader: yaml.SafeLoader, node: yaml.MappingNode) -> _MarkedDict:
    mapping = _MarkedDict(loader.construct_mapping(node, deep=True))
    mapping.start_mark = node.start_mark
    return mapping


_ConfigLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_marked_mapping
)


def _load_config(path: Path) -> dict:
    with open(path, encoding="utf-8") as handle:
        config = yaml.load(handle, Loader=_ConfigLoader)
    if config is None:
        return _MarkedDict()
    if not isinstance(config, dict):
        raise ValueError("export config must be a mapping")
    return config


def _is_scalar(value: Any) -> bool:
    return value is not None and not isinstance(value, (dict, list))


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _invalid_output_option(output: dict) -> str | None:
    for key in ("path", "type"):
        if not _is_scalar(output.get(key)):
            return key
    return None


def _with_output(destination: Path, output: dict) -> Path:
    target = Path(destination) / _scalar_text(output["path"])
    return Path(f"{target}.{_scalar_text(output['type'])}")


def _tail(source: str | Path) -> Path:
    """The last two components of ``source``: its path below its grandparent."""
    path = Path(source)
    names = path.parts[1:] if path.anchor else path.parts
    return Path(*names[-2:])


class AssetBundler:
    """Compiles, caches and links the assets of a source directory."""

    def __init__(self, register: PipeRegister | None = None, workdir: str | Path | None = None) -> None:
        self.register = register if register is not None else bundler_register()
        self.workdir = Path(workdir).absolute() if workdir is not None else Path.cwd()

    def _resolve(self, path: str | Path) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.workdir / path

    def _walk(self, path: str | Path) -> list[Path]:
        root = self._resolve(path)
        if not root.exists():
            raise AssetBundlerError(
                f"Cannot create recursive directory iterator by specified path {path} "
                "as it's a non exists location"
            )
        if not root.is_dir():
            raise AssetBundlerError(
                f"Cannot create recursive directory iterator by specified path {path} as it's a file."
            )
        try:
            return sorted(root.rglob("*"), key=lambda entry: entry.parts)
        except OSError as exc:
            raise AssetBundlerError(
                f"Cannot create recursive directory iterator for {path}. what: {exc}"
            ) from exc

    def _export_options(self, config: dict) -> list | None:
        options = config.get("exports")
        if options is None:
            return None
        if not isinstance(options, list):
            logger.error("Export options must be a sequence")
            return []
        return options

    def _match_export(self, source: str | Path, exports: list, relative: str) -> dict | None:
        for option in exports:
            export_path = option.get("path") if isinstance(option, dict) else None
            if export_path is None:
                logger.error("Export elements must have path option: %s", source)
                continue
            if not _is_scalar(export_path):
                logger.error("Export path must be string type: %s", source)
                continue
            try:
                pattern = re.compile(_scalar_text(export_path))
            except re.error as exc:
                logger.error("Invalid regex expression in path option %s:\n %s", source, exc)
                continue
            if pattern.fullmatch(relative):
                return option
        return None

    def build(self, source: str | Path) -> Path:
        """Build ``source`` into bundles and exported directories; return the output directory."""
        output_path = self.workdir.parent / "res"
        with Stopwatch("Builded"):
            logger.info("===========================")
            logger.info("Start build directory %s", source)

            cache_path = self.workdir / ".cache" / Path(source).name
            output_path.mkdir(exist_ok=True)

            self.clear_unused_cache(source, cache_path)
            self.process_directory(source, cache_path)

            try:
                entries = sorted(cache_path.iterdir())
            except OSError as exc:
                logger.error(
                    "Failed create directory iterator for %s directory: %s", cache_path, exc
                )
                return output_path

            for entry in entries:
                if entry.suffix == ".bundle":
                    self.link_directory(entry, output_path / entry.name)
                elif entry.suffix == ".directory":
                    self.export_directory(entry, (output_path / entry.name).with_suffix(""))
        return output_path

    def clear_unused_cache(self, source: str | Path, cache: str | Path) -> None:
        """Remove cached files whose source file no longer exists."""
        cache_root = self._resolve(cache)
        if not cache_root.exists():
            return
        with Stopwatch("Clear unused cache"):
            try:
                entries = self._walk(cache_root)
            except AssetBundlerError as exc:
                logger.error("%s", exc)
                return

            for entry in entries:
                if entry.is_dir():
                    if any(entry.iterdir()):
                        continue
                    entry.rmdir()

                source_file = Path(".") / remove_first_directory(entry.relative_to(cache_root))
                if source_file.suffix != CACHE_EXTENSION:
                    return
                source_file = source_file.with_suffix("")
                if self._resolve(source_file).exists():
                    continue

                logger.info("Remove cache value: %s", source_file)
                if entry.is_file():
                    entry.unlink()

    def process_directory(self, source: str | Path, destination: str | Path) -> None:
        """Process a directory that holds an export config."""
        with Stopwatch("Processed"):
            config_path = self._resolve(source) / CONFIG_NAME
            if not config_path.exists():
                return

            logger.info("Start processing directory: '%s'", source)
            try:
                config = _load_config(config_path)
            except (OSError, ValueError, yaml.YAMLError):
                logger.error("Failed open export config: %s", source)
                return

            destination = Path(destination)
            output = config.get("output")
            if isinstance(output, dict):
                invalid = _invalid_output_option(output)
                if invalid is not None:
                    logger.error("Invalid output configuration: missing %s option", invalid)
                    return
                destination = _with_output(destination, output)

            self.preprocess_directory(source, config)
            self.compile_directory(source, destination, config)
            self.process_child_directories(source, destination, config)

    def process_child_directories(self, source: str | Path, destination: str | Path, config: dict) -> None:
        """Process every subdirectory matched by an export option."""
        try:
            entries = self._walk(source)
        except AssetBundlerError as exc:
            logger.error("Cannot create directory iterator: %s", exc)
            return

        root = self._resolve(source)
        try:
            exports = self._export_options(config)
            if exports is None:
                return

            logger.info("Run processing child directories...")
            for entry in entries:
                if not entry.is_dir():
                    continue
                option = self._match_export(source, exports, entry.relative_to(root).as_posix())
                if option is None:
                    continue

                target = Path(destination)
                output = option.get("output")
                if isinstance(output, dict):
                    invalid = _invalid_output_option(output)
                    if invalid == "path":
                        logger.error("Invalid output configuration: missing path option")
                        continue
                    if invalid == "type":
                        logger.error("Invalid output configuration: missing type option")
                        return
                    target = _with_output(target, output)

                self.process_directory(entry, target)
        except Exception as exc:
            logger.error("Failed compiling child directories: %s", exc)

    def compile_directory(self, source: str | Path, destination: str | Path, config: dict) -> None:
        """Compile every file matched by an export option into the cache."""
        with Stopwatch("Compiled"):
            try:
                entries = self._walk(source)
            except AssetBundlerError as exc:
                logger.error("Cannot create directory iterator: %s", exc)
                return

            root = self._resolve(source)
            prefix = _tail(source)
            try:
                logger.info("Run compiling process...")
                exports = self._export_options(config)
                if exports is None:
                    return
                for entry in entries:
                    if entry.is_dir() or entry.name == CONFIG_NAME or entry.suffix == CONFIG_NAME:
                        continue
                    relative = entry.relative_to(root)
                    option = self._match_export(source, exports, relative.as_posix())
                    if option is None:
                        continue
                    if option.get("pipe") is None:
                        logger.error("Cannot find pipe for compile asset by path '%s'", relative)
                        continue

                    pipe_type = _scalar_text(option["pipe"])
                    pipe = self.register.get_pipe(asset_hash(pipe_type))
                    if pipe is None:
                        logger.warning("Unknown pipe type: '%s'", pipe_type)
                        continue

                    pipe.configure(option)
                    self.compile_file(entry, Path(destination) / prefix / relative, pipe)
            except Exception as exc:
                logger.error("Failed compiling directory '%s': %s", source, exc)

    def preprocess_directory(self, path: str | Path, config: dict) -> None:
        """Run the shell commands listed under ``preprocessing`` inside ``path``."""
        if "preprocessing" not in config:
            return
        options = config["preprocessing"]

        with Stopwatch("Preprocessing"):
            logger.info("Run preprocessing commands...")
            if not isinstance(options, dict):
                yaml_error("Failed parsing '{}': preprocessing options must be map.", options, path)
                return

            for step, value in options.items():
                if not _is_scalar(step) or not _is_scalar(value):
                    yaml_error(
                        "Failed parsing '{}': preprocessing option must be scalar type.", options, path
                    )
                    continue

                step = _scalar_text(step)
                if step != "execute":
                    yaml_warn("When parsing '{}' ignoring unknown option: '{}'", options, path, step)
                    continue

                command = _scalar_text(value)
                logger.info("Execute: cd %s && %s", path, command)
                try:
                    subprocess.run(command, shell=True, cwd=self._resolve(path), check=False)
                except OSError as exc:
                    yaml_error(
                        "Failed execute shell command '{}' for preprocessing: {}", options, command, exc
                    )
                    return

    def compile_file(self, source: str | Path, destination: str | Path, pipe: AssetPipe) -> Path | None:
        """Compile one file into ``destination`` plus the cache extension.

        Returns the cache path when the pipe ran, None when the cache was
        already up to date or the file could not be compiled.
        """
        logger.info("Compile file: %s", source)
        source_path = self._resolve(source)
        if not source_path.exists():
            logger.error(
                "Cannot compile file by specified path %s as it's a non exists location", source
            )
            return None
        if source_path.is_dir():
            logger.error("Cannot compile file by specified path %s as it's a directory", source)
            return None

        target = self._resolve(Path(f"{destination}{CACHE_EXTENSION}"))
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            if target.exists() and source_path.stat().st_mtime_ns <= target.stat().st_mtime_ns:
                return None
            pipe.compile(source_path, target)
        except Exception as exc:
            logger.error("Failed compile file by path %s: %s", source, exc)
            return None
        return target

    def link_directory(self, source: str | Path, destination: str | Path) -> None:
        """Link every file below ``source`` into one bundle file."""
        with Stopwatch("Linked"):
            logger.info("===========================")
            logger.info("Start linking files in directory %s", source)

            try:
                entries = self._walk(source)
            except AssetBundlerError as exc:
                logger.error("%s", exc)
                return

            root = self._resolve(source)
            try:
                bundle = open(self._resolve(destination), "wb")
            except OSError:
                logger.error("Cannot create file for create bundle by path %s", destination)
                return

            with bundle:
                files: dict[Path, bytes] = {}
                for entry in entries:
                    if entry.is_dir():
                        continue
                    try:
                        data = entry.read_bytes()
                    except OSError:
                        logger.warning("Cannot read entry in directory %s", entry)
                        continue
                    files.setdefault(entry.relative_to(root).with_suffix(""), data)

                ordered = sorted(files.items(), key=lambda item: item[0].parts)
                header_size = ASSET_ID.size * (2 * len(ordered) + 1)
                bundle.write(ASSET_ID.pack(header_size))
                logger.info("Write bundle header. header size: %d", header_size)

                offset = header_size
                for name, data in ordered:
                    asset_id = asset_hash(replace_all(str(name), "\\", "/"))
                    logger.info(
                        "Write meta-resource. name: '%s', id: %d, offset: %d", name, asset_id, offset
                    )
                    bundle.write(ASSET_ID.pack(asset_id))
                    bundle.write(ASSET_ID.pack(offset))
                    offset += len(data)

                for _, data in ordered:
                    bundle.write(data)

    def export_directory(self, source: str | Path, destination: str | Path) -> None:
        """Copy cached files into ``destination`` under their original names."""
        with Stopwatch("Exported"):
            logger.info("Export directory %s to %s", source, destination)
            try:
                entries = self._walk(source)
            except AssetBundlerError as exc:
                logger.error("Cannot create directory iterator: %s", exc)
                return

            target_root = self._resolve(destination)
            for entry in entries:
                if entry.is_dir() or entry.suffix != CACHE_EXTENSION:
                    continue
                name = Path(entry.name).with_suffix("")
                target = target_root / name
                target.parent.mkdir(parents=True, exist_ok=True)
                try:
                    logger.info("Export file: %s to %s", name, target)
                    shutil.copyfile(entry, target)
                except OSError as exc:
                    logger.error("Failed to export file from %s: %s", entry, exc)