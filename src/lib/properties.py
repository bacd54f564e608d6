"""
Property table and key resolution

Properties feed two things: {{key}} placeholders in program text, and
variables bound into the default evaluator's namespace.

Property files are YAML mappings:

    version: 1.2.3
    group: com.example
    url: https://example.com
"""

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from ..config import appsettings
from .errors import PropertiesError
from .log import WarningSink, warning_log


class Properties:
    """
    Read-only property table with a total key resolver

    Attributes:
        values: Property values by key
        warning_sink: Receives "Unknown key '<key>'" for unmapped keys
    """

    def __init__(
        self,
        values: Optional[Mapping[str, Any]] = None,
        warning_sink: WarningSink = warning_log,
    ) -> None:
        self.values: Dict[str, Any] = dict(values or {})
        self.warning_sink = warning_sink

    @classmethod
    def from_yaml(
        cls, path: Union[str, Path], warning_sink: WarningSink = warning_log
    ) -> "Properties":
        """
        Load properties from a YAML mapping file

        Raises:
            PropertiesError: File unreadable, invalid YAML, or not a mapping
        """
        path = Path(path)
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise PropertiesError(f"Cannot read property file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise PropertiesError(f"Invalid YAML in property file {path}: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise PropertiesError(
                f"Property file {path} must contain a mapping, got {type(loaded).__name__}"
            )
        return cls({str(key): value for key, value in loaded.items()}, warning_sink)

    def merged(self, **extra: Any) -> "Properties":
        """New table with extra values layered over these"""
        return type(self)({**self.values, **extra}, self.warning_sink)

    def key_resolve(self, section: str, key: str) -> str:
        """
        Resolve a placeholder key for the given section

        Never fails: an unmapped key is reported to the warning sink and
        replaced by a deterministic sentinel.

        Example:
            >>> Properties({"version": "1.2.3"}).key_resolve("badges", "version")
            '1.2.3'
            >>> Properties({}).key_resolve("badges", "nope")
            'nope=UNKNOWN'
        """
        value = self.values.get(key)
        if value is not None:
            return str(value)
        self.warning_sink(f"Unknown key '{key}'")
        return appsettings.sentinel_make(key)

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def __len__(self) -> int:
        return len(self.values)
