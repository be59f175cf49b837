from dataclasses import dataclass
from typing import Any

from libb import ConfigOptions

__all__ = ['MappingOptions', 'resolve_options']


@dataclass
class MappingOptions(ConfigOptions):
    """Options

    - strict_keys: Reject a second distinct primary-key or generated member
      instead of letting the last one win (default: False)
    - ignore_unknown_columns: Skip row columns without a mapped property when
      materializing instances (default: True)
    - cache_maxsize: Maximum number of catalogs held by the process-wide
      catalog cache, applied through Cache.configure (default: 512)
    """
    strict_keys: bool = False
    ignore_unknown_columns: bool = True
    cache_maxsize: int = 512

    def __post_init__(self):
        if self.cache_maxsize < 1:
            raise ValueError(f'cache_maxsize must be positive, got {self.cache_maxsize}')


def resolve_options(options: MappingOptions | dict[str, Any] | None = None,
                    **kw: Any) -> MappingOptions:
    """Build MappingOptions from an options object, a dict, or keyword arguments.
    """
    if isinstance(options, MappingOptions):
        return options
    values = dict(options or {})
    values.update(kw)
    return MappingOptions(**values)
