# mirrorsync Job Context
# Layered key/value store publishing job paths to shared code

from typing import Any

WORKING_DIR_KEY = "working_dir"
LOG_DIR_KEY = "log_dir"
LOG_FILE_KEY = "log_file"


class Context:
    """
    Layered key/value store.

    `enter()` opens a new layer that sees every value of the layers below it;
    values set in that layer disappear again on `exit()`.
    """

    def __init__(self) -> None:
        self._layers: list[dict[str, Any]] = [{}]

    def set(self, key: str, value: Any) -> None:
        """Set a value in the innermost layer."""
        self._layers[-1][key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get the value of the innermost layer defining `key`."""
        for layer in reversed(self._layers):
            if key in layer:
                return layer[key]
        return default

    def __contains__(self, key: str) -> bool:
        return any(key in layer for layer in self._layers)

    def enter(self) -> "Context":
        """Push a new layer."""
        self._layers.append({})
        return self

    def exit(self) -> "Context":
        """
        Pop the innermost layer.

        Raises:
            RuntimeError: If only the root layer is left.
        """
        if len(self._layers) == 1:
            raise RuntimeError("cannot exit the root context layer")
        self._layers.pop()
        return self

    @property
    def depth(self) -> int:
        return len(self._layers)
