"""
Live configuration store backed by an INI-style file.

Values are kept in memory as ``section -> key -> value`` strings. Handlers
can be bound to individual (section, key) pairs and are run against the
current value on load, on `reload`, or on demand.

    store = ConfigStore("~/.config/app/config.ini", {("graphics", "vsync"): set_vsync})
    store.set("graphics", "vsync", "off", apply=True)
    store.save()
"""

from __future__ import annotations
import copy
import logging
from pathlib import Path
from typing import Callable, Dict, List, Mapping, NamedTuple, Optional, Type, Tuple, Union

from .fs_utils import PathLike, copy_file, create_file, expand_tilde
from .ini_format import ConfigData, parse_config_file, render_config
from .log import get_logger
from .numeric import Number, check_number_type, parse_number

ConfigHandler = Callable[[str], None]


class SectionKeyPair(NamedTuple):
    """Identity of one configuration entry."""

    section: str
    key: str


HandlerMap = Mapping[Union[SectionKeyPair, Tuple[str, str]], ConfigHandler]


class ConfigStore:
    """
    In-memory section/key/value store with per-entry handlers.

    Not thread-safe. The backing file is read at construction and on
    `reload`, and written only by `save`.
    """

    def __init__(
        self,
        config_path: PathLike,
        handlers: Optional[HandlerMap] = None,
        apply: bool = True,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            config_path: Backing INI file, ``~`` is expanded
            handlers: Initial (section, key) -> handler mapping
            apply: Run `apply_all` once after the initial load
            logger: Logger to report through (default: "ini_store.configuration")
        """
        self._config_path = expand_tilde(config_path)
        self.log = logger or get_logger("ini_store.configuration")
        self._handlers: Dict[SectionKeyPair, ConfigHandler] = {
            SectionKeyPair(*pair): handler for pair, handler in (handlers or {}).items()
        }
        self._data: ConfigData = {}

        parse_config_file(self._config_path, self.log, self._data)

        if apply:
            self.apply_all()

    @property
    def config_path(self) -> Path:
        return self._config_path

    # ---------------------------------------------------------------------- #
    def reload(self) -> None:
        """Drop all in-memory values (saved or not), re-read the file and re-apply handlers."""
        self._data.clear()
        parse_config_file(self._config_path, self.log, self._data)
        self.apply_all()

    def register_handler(self, section: str, key: str, handler: ConfigHandler) -> None:
        """Bind `handler` to (section, key), replacing any previous one. Nothing is invoked."""
        self._handlers[SectionKeyPair(section, key)] = handler

    # ---------------------------------------------------------------------- #
    def set(self, section: str, key: str, value: str, apply: bool = False) -> bool:
        self._data.setdefault(section, {})[key] = value

        if apply:
            self.apply_for(section, key)

        self.log.debug("Set config value [%s].%s = %s", section, key, value)
        return True

    def get(self, section: str, key: str) -> Optional[str]:
        return self._data.get(section, {}).get(key)

    def get_numeric(self, section: str, key: str, number_type: Type[Number] = int) -> Optional[Number]:
        """
        Value parsed as `number_type` (int or float), or None if the entry
        is missing or is not a complete numeral ("12abc" and " 12" fail).
        """
        check_number_type(number_type)
        value = self.get(section, key)
        if value is None:
            return None
        return parse_number(value, number_type)

    def is_on(self, section: str, key: str) -> bool:
        """True only if the value exists and is exactly "on"."""
        return self.get(section, key) == "on"

    def remove(self, section: str, key: str) -> bool:
        """Delete one entry; an emptied section is dropped as well. False if absent."""
        key_values = self._data.get(section)
        if key_values is None or key not in key_values:
            return False

        del key_values[key]
        if not key_values:
            del self._data[section]

        self.log.debug("Removed config value [%s].%s", section, key)
        return True

    # ---------------------------------------------------------------------- #
    def has_section(self, section: str) -> bool:
        return section in self._data

    def has_value(self, section: str, key: str) -> bool:
        return key in self._data.get(section, {})

    def get_sections(self) -> List[str]:
        return list(self._data)

    def get_keys(self, section: str) -> List[str]:
        return list(self._data.get(section, {}))

    def to_dict(self) -> ConfigData:
        """Deep copy of the current values."""
        return copy.deepcopy(self._data)

    # ---------------------------------------------------------------------- #
    def save(self, path: Optional[PathLike] = None) -> bool:
        """
        Write all sections to `path` (default: the backing file).

        False on I/O failure or when a value cannot be encoded; in the latter
        case the target file is left as it was.
        """
        target = self._config_path if path is None else expand_tilde(path)
        try:
            content = render_config(self._data, self.log)
            create_file(target)
            with open(target, "wb") as f:
                f.write(content)
        except (OSError, UnicodeError) as e:
            self.log.error("Unable to write config file: %s (%s)", target, e)
            return False

        self.log.info("Successfully saved configuration to: %s", target)
        return True

    def backup(self, backup_path: PathLike) -> bool:
        """
        Copy the backing file as it is on disk to `backup_path`.

        Unsaved in-memory changes are not part of the backup; call `save` first.
        """
        try:
            target = copy_file(self._config_path, backup_path)
        except OSError as e:
            self.log.error("Failed to backup configuration: %s", e)
            return False

        self.log.info("Configuration backed up to: %s", target)
        return True

    # ---------------------------------------------------------------------- #
    def apply_for(self, section: str, key: str) -> None:
        """Run the handler of one entry, if both the value and a handler exist."""
        value = self.get(section, key)
        if value is None:
            return

        handler = self._handlers.get(SectionKeyPair(section, key))
        if handler is not None:
            self._invoke(section, key, value, handler)

    def apply_all(self) -> None:
        """
        Run every stored entry through its handler; entries without one are reported.

        Handlers may edit the store: a pair removed by an earlier handler is
        skipped, a changed one is applied with its current value. Pairs added
        during the pass are not visited.
        """
        pairs = [SectionKeyPair(section, key) for section, key_values in self._data.items() for key in key_values]
        for section, key in pairs:
            value = self.get(section, key)
            if value is None:
                continue
            handler = self._handlers.get(SectionKeyPair(section, key))
            if handler is None:
                self.log.warning("there was no function associated with the section, key pair: %s, %s", section, key)
                continue
            self.log.debug("running config logic on %s, %s with value %s", section, key, value)
            self._invoke(section, key, value, handler)

    def _invoke(self, section: str, key: str, value: str, handler: ConfigHandler) -> None:
        try:
            handler(value)
        except Exception as e:
            self.log.error("Failed to apply config logic for [%s].%s: %s", section, key, e)
            return
        self.log.debug("Applied config logic for [%s].%s", section, key)
