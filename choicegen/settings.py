"""
Runtime settings, read from CHOICEGEN_* environment variables.

Command line flags override anything found here.
"""
import logging
import os
from dataclasses import dataclass, fields, replace

from .errors import InvalidArgument

ENV_PREFIX = 'CHOICEGEN_'

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off', ''}

# fields whose variable name isn't just the upper-cased field name
_ENV_NAMES = {'log_to_file': 'LOG_FILE'}


@dataclass(frozen=True)
class EngineSettings:
    n_jobs: int = 1             # joblib n_jobs for run_partitioned (-1: all cores)
    backend: str = 'loky'       # joblib backend: loky, threading, multiprocessing
    log_level: str = 'WARNING'
    log_prefix: str = 'choicegen'
    log_to_file: bool = False   # also log to a rotating file in a private tmp dir
    max_print: int = 10000      # cap on lines written by the print command

    def __post_init__(self):
        if self.n_jobs == 0:
            raise InvalidArgument("n_jobs must be nonzero")
        if self.backend not in ('loky', 'threading', 'multiprocessing', 'sequential'):
            raise InvalidArgument(f"unknown joblib backend: {self.backend!r}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidArgument(f"unknown log level: {self.log_level!r}")
        if self.max_print < 0:
            raise InvalidArgument(f"max_print must be nonnegative, got {self.max_print}")

    @property
    def level(self):
        return logging.getLevelName(self.log_level.upper())

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ
        values = {}

        for f in fields(cls):
            key = ENV_PREFIX + _ENV_NAMES.get(f.name, f.name.upper())
            raw = environ.get(key)
            if raw is None:
                continue
            values[f.name] = _parse(key, f.type, raw)

        return cls(**values)

    def override(self, **changes):
        '''Copy with every non-None change applied'''
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _parse(key, type_, raw):

    # field types are strings when annotations are postponed
    type_name = getattr(type_, '__name__', type_)

    if type_name == 'bool':
        value = raw.strip().lower()
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
        raise InvalidArgument(f"{key} must be a boolean, got {raw!r}")

    if type_name == 'int':
        try:
            return int(raw)
        except ValueError:
            raise InvalidArgument(f"{key} must be an integer, got {raw!r}") from None

    return raw.strip()
