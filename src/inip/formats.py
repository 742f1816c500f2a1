# -*- encoding: utf-8 -*-
# @File   : formats.py
# @Time   : 2026/10/19 16:31:40
# @Author : Kariko Lin

"""Files in and out.

- `IniFileParser`: the INI file itself. The whole file is read into
  the arena before scanning starts.
- `JsonEntriesHandler`, `YamlEntriesHandler`: the ordered entry list
  as `[{key, value, section}, ...]`, readable back.
"""

import json
import logging
from typing import Any, TypedDict

import yaml
from chardet import detect as guess_codec

from .abstract import FileHandler
from .errors import MalformedInput
from .model import IniDocument
from .parser import from_records, parse
from .settings import Settings


class EntryRecord(TypedDict):
    key: str
    value: str
    section: str


def to_records(doc: IniDocument) -> list[EntryRecord]:
    return [
        EntryRecord(key=str(i.key), value=str(i.value), section=str(i.section))
        for i in doc.entries
    ]


def _check_records(src: Any, where: str) -> list[Any]:
    if not isinstance(src, list):
        raise MalformedInput(
            f'{where}: expected a list of entries, got {type(src).__name__}')
    return src


class IniFileParser(FileHandler[IniDocument]):
    def __init__(self, filename: str, settings: Settings | None = None):
        super().__init__(filename)
        self._settings = Settings() if settings is None else settings

    def _transcode(self, raw: bytes) -> bytes:
        """Bring the file to an ASCII-compatible byte form.

        Plain ASCII goes through as is. Otherwise decode with the
        configured codec, or with chardet's guess when it is sure enough,
        and re-encode as UTF-8.
        """
        codec = self._settings.encoding
        if codec is None:
            if raw.isascii():
                return raw
            guess = guess_codec(raw)
            if (guess['encoding'] is None
                    or guess['confidence'] < self._settings.min_confidence):
                logging.warning(
                    '%s: unsure about the encoding (%s), reading raw bytes.',
                    self._fn, guess['encoding'])
                return raw
            codec = guess['encoding']
            logging.info('%s: decoding as %s (confidence %.2f)',
                         self._fn, codec, guess['confidence'])
        try:
            return raw.decode(codec).encode('utf-8')
        except UnicodeDecodeError as e:
            raise MalformedInput(
                f'{self._fn} is not valid {codec}', e.start) from e

    def read(self) -> IniDocument:
        try:
            with open(self._fn, 'rb') as fp:
                raw = fp.read()
        except OSError as e:
            raise self._io_failure(e) from e
        return parse(self._transcode(raw), self._settings)

    @staticmethod
    def dumps(doc: IniDocument, blank_lines: int = 1) -> str:
        """INI text of `doc`, reading back to the same lookups.

        Entries are written in order and a header starts each run of one
        section, so a reopened section gets its own block again.
        Within a run only the last value of a key is kept. Comments are gone.
        """
        runs: list[tuple[str, dict[str, str]]] = []
        for i in doc.entries:
            section = str(i.section)
            if not runs or runs[-1][0] != section:
                if not section and runs:
                    # there is no header going back to section ''.
                    raise MalformedInput(
                        f'pairs without a section after [{runs[-1][0]}]')
                runs.append((section, {}))
            runs[-1][1][str(i.key)] = str(i.value)
        blocks = []
        for name, pairs in runs:
            lines = [f'[{name}]'] if name else []
            # `k=` alone would take the next line's key as its value.
            lines.extend(f'{k}={v}' if v else f'{k}=;' for k, v in pairs.items())
            blocks.append('\n'.join(lines))
        if not blocks:
            return ''
        return ('\n' * (blank_lines + 1)).join(blocks) + '\n'

    def write(self, instance: IniDocument, *, blank_lines: int = 1) -> None:
        try:
            with open(self._fn, 'w', encoding='ascii') as fp:
                fp.write(self.dumps(instance, blank_lines))
        except OSError as e:
            raise self._io_failure(e) from e

    def __str__(self) -> str:
        return 'INI: ' + super().__str__()


class JsonEntriesHandler(FileHandler[IniDocument]):
    def __init__(
        self, filename: str, encoding: str = 'utf-8',
        settings: Settings | None = None
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self._settings = settings

    @staticmethod
    def dumps(doc: IniDocument, indent: int = 2) -> str:
        return json.dumps(to_records(doc), indent=indent)

    def read(self) -> IniDocument:
        try:
            with open(self._fn, 'r', encoding=self._codec) as fp:
                src = json.load(fp)
        except OSError as e:
            raise self._io_failure(e) from e
        except json.JSONDecodeError as e:
            raise MalformedInput(f'{self._fn}: {e.msg}', e.pos) from e
        return from_records(_check_records(src, self._fn), self._settings)

    def write(self, instance: IniDocument, indent: int = 2) -> None:
        try:
            with open(self._fn, 'w', encoding=self._codec) as fp:
                json.dump(to_records(instance), fp, indent=indent)
        except OSError as e:
            raise self._io_failure(e) from e


class YamlEntriesHandler(FileHandler[IniDocument]):
    def __init__(
        self, filename: str, encoding: str = 'utf-8',
        settings: Settings | None = None
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self._settings = settings

    @staticmethod
    def dumps(doc: IniDocument) -> str:
        # keep key/value/section order instead of sorting.
        return yaml.safe_dump(to_records(doc), sort_keys=False)

    def read(self) -> IniDocument:
        try:
            with open(self._fn, 'r', encoding=self._codec) as fp:
                src = yaml.safe_load(fp)
        except OSError as e:
            raise self._io_failure(e) from e
        except yaml.YAMLError as e:
            raise MalformedInput(f'{self._fn}: {e}') from e
        if src is None:
            src = []
        return from_records(_check_records(src, self._fn), self._settings)

    def write(self, instance: IniDocument) -> None:
        try:
            with open(self._fn, 'w', encoding=self._codec) as fp:
                fp.write(self.dumps(instance))
        except OSError as e:
            raise self._io_failure(e) from e
