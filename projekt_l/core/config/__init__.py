"""
Configuration subsystem for the progression engine.

Static configuration is loaded from environment variables (.env supported
through python-dotenv). There is no dynamic or database-backed configuration:
gameplay constants live in projekt_l.modules.shared.constants.

Usage
-----
```python
from projekt_l.core.config import Config

Config.validate()
threshold = Config.LEVEL_UP_ALERT_THRESHOLD
```
"""

from projekt_l.core.config.config import Config, Environment
from projekt_l.core.config.errors import ConfigError, ConfigValidationError

__all__ = [
    "Config",
    "Environment",
    "ConfigError",
    "ConfigValidationError",
]
