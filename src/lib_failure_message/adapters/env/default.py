"""Environment variable adapter.

Purpose
-------
Translate process environment variables into the :class:`Settings` value
object. Only variables under the package prefix are considered.

Key behaviours
--------------
* Enforces a prefix (``default_env_prefix``) so unrelated environment variables
  never influence the protocol.
* Performs light type coercion for common scalar types (bools, ints, floats,
  ``null``/``none``).
* Validates coerced values against the field types of :class:`Settings` and
  raises :class:`InvalidSettingError` on mismatch.
* Emits structured logging via :mod:`lib_failure_message.observability`.
"""

from __future__ import annotations

import os
from dataclasses import fields, replace
from typing import Final, Mapping

from ...domain.errors import InvalidSettingError
from ...domain.settings import DEFAULT_SETTINGS, Settings
from ...observability import log_debug, log_error, make_event

SLUG: Final[str] = "lib-failure-message"


def default_env_prefix(slug: str) -> str:
    """Return the canonical environment prefix for *slug*.

    Examples
    --------
    >>> default_env_prefix('lib-failure-message')
    'LIB_FAILURE_MESSAGE'
    """

    return slug.replace("-", "_").upper()


class DefaultEnvLoader:
    """Load environment variables that belong to the package namespace."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Initialise the loader with a specific ``environ`` mapping for testability.

        Parameters
        ----------
        environ:
            Mapping to read from. Defaults to :data:`os.environ`.
        """

        self._environ = os.environ if environ is None else environ

    def load(self, prefix: str) -> dict[str, object]:
        """Return a flat mapping of lowercase keys for variables under *prefix*.

        Examples
        --------
        >>> loader = DefaultEnvLoader(environ={'DEMO_SPIN_YIELD': 'false', 'OTHER': '1'})
        >>> loader.load('DEMO')
        {'spin_yield': False}
        """

        prefix = f"{prefix}_" if prefix and not prefix.endswith("_") else prefix
        collected: dict[str, object] = {}
        for key, value in self._environ.items():
            if prefix and not key.startswith(prefix):
                continue
            stripped = key[len(prefix) :] if prefix else key
            if not stripped:
                continue
            collected[stripped.lower()] = _coerce(value)
        log_debug("env_variables_loaded", **make_event("settings", None, {"keys": sorted(collected)}))
        return collected


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from the environment.

    Unknown keys under the prefix are ignored so newer variables do not break
    older installations.

    Raises
    ------
    InvalidSettingError
        When a known key holds a value of the wrong type.

    Examples
    --------
    >>> load_settings({'LIB_FAILURE_MESSAGE_INCLUDE_LOCATION': 'false'})
    Settings(spin_yield=True, include_location=False)
    """

    raw = DefaultEnvLoader(environ=environ).load(default_env_prefix(SLUG))
    values: dict[str, object] = {}
    for field in fields(Settings):
        if field.name not in raw:
            continue
        value = raw[field.name]
        if not isinstance(value, bool):
            variable = f"{default_env_prefix(SLUG)}_{field.name.upper()}"
            log_error("settings_rejected", **make_event("settings", None, {"variable": variable}))
            raise InvalidSettingError(f"{variable} must be true or false, got {value!r}")
        values[field.name] = value
    settings = replace(DEFAULT_SETTINGS, **values)
    log_debug("settings_loaded", **make_event("settings", None, {"overrides": sorted(values)}))
    return settings


def _coerce(value: str) -> object:
    """Coerce textual environment values to Python primitives where possible.

    Examples
    --------
    >>> _coerce('true'), _coerce('10'), _coerce('3.5'), _coerce('hello')
    (True, 10, 3.5, 'hello')
    """

    lowered = value.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"null", "none"}:
        return None
    try:
        if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
            return int(value)
        float_value = float(value)
        return float_value
    except ValueError:
        return value
