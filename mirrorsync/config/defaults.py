# mirrorsync Default Configuration
# Built-in defaults and the YAML template written by `mirrorsync config init`

from typing import Any

import yaml

# Retry count applied when a mirror leaves `retry` unset or zero
DEFAULT_MAX_RETRY = 2

# Sync interval in minutes
DEFAULT_INTERVAL = 1440

DEFAULT_RSYNC_CMD = "rsync"
LOG_FILE_NAME = "latest.log"

DEFAULT_CONFIG: dict[str, Any] = {
    "global": {
        "mirror_dir": "/srv/mirror",
        "log_dir": "/var/log/mirrorsync/{name}",
        "interval": DEFAULT_INTERVAL,
        "retry": DEFAULT_MAX_RETRY,
    },
    "mirrors": [
        {
            "name": "debian",
            "provider": "rsync",
            "upstream": "rsync://mirror.example.org/debian/",
            "use_ipv6": False,
            "use_ipv4": False,
            "rsync_options": ["--bwlimit=10000"],
        },
    ],
}


def generate_default_config() -> str:
    """Generate default configuration as YAML string with comments."""
    header = """# mirrorsync Worker Configuration
#
# Each entry under `mirrors` describes one sync job.
#
# Providers:
#   - rsync:   mirror an rsync upstream (upstream must end with /)
#   - command: run an arbitrary sync script
#
# Paths:
#   - working dir: <mirror_dir>/<name>
#   - log file:    <log_dir>/latest.log ({name} in log_dir is the mirror name)
#
# Credentials (username/password) are passed to rsync through the
# environment, never on the command line.

"""
    return header + yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False, allow_unicode=True)
