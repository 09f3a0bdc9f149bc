"""DeviceStatus model representing a receiver status snapshot."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

# Value ranges reported by the receiver
SUBWOOFER_MIN = -12
SUBWOOFER_MAX = 12
TONE_MIN = -12
TONE_MAX = 12
DIALOGUE_MIN = 0
DIALOGUE_MAX = 3


class Toggle(Enum):
    """Boolean receiver settings controlled via an ``enable`` parameter.

    The member value is the status field name reported by ``getStatus``.
    """

    PURE_DIRECT = "pure_direct"
    ENHANCER = "enhancer"
    EXTRA_BASS = "extra_bass"
    ADAPTIVE_DRC = "adaptive_drc"

    @property
    def endpoint(self) -> str:
        """Return the control endpoint, e.g. ``setPureDirect``."""
        return "set" + "".join(part.capitalize() for part in self.value.split("_"))

    @property
    def label(self) -> str:
        """Return the human-readable menu label."""
        return _TOGGLE_LABELS[self]


_TOGGLE_LABELS = {
    Toggle.PURE_DIRECT: "Pure Direct",
    Toggle.ENHANCER: "Enhancer",
    Toggle.EXTRA_BASS: "Extra Bass",
    Toggle.ADAPTIVE_DRC: "Adaptive DRC",
}


def _require_int(data: Mapping[str, Any], key: str) -> int:
    value = data[key]
    # bool is an int subclass, but true/false never round-trips as a number
    if isinstance(value, bool):
        raise TypeError(f"field {key!r} must be an integer, got bool")
    # Some encoders write whole numbers as 20.0
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if not isinstance(value, int):
        raise TypeError(f"field {key!r} must be an integer, got {type(value).__name__}")
    return value


def _require_bool(data: Mapping[str, Any], key: str) -> bool:
    value = data[key]
    if not isinstance(value, bool):
        raise TypeError(f"field {key!r} must be a boolean, got {type(value).__name__}")
    return value


def _require_object(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data[key]
    if not isinstance(value, Mapping):
        raise TypeError(f"field {key!r} must be an object, got {type(value).__name__}")
    return value


@dataclass(frozen=True, slots=True)
class ToneControl:
    """Tone control settings.

    Attributes:
        mode: Tone mode as reported by the device (e.g. "manual", "auto").
        bass: Bass level in [-12, 12].
        treble: Treble level in [-12, 12].
    """

    mode: str
    bass: int
    treble: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ToneControl":
        """Create tone control from the ``tone_control`` JSON object.

        Raises:
            KeyError: If a field is missing.
            TypeError: If a field has the wrong type.
        """
        mode = data["mode"]
        if not isinstance(mode, str):
            raise TypeError(f"field 'mode' must be a string, got {type(mode).__name__}")
        return cls(
            mode=mode,
            bass=_require_int(data, "bass"),
            treble=_require_int(data, "treble"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the device JSON shape."""
        return {"mode": self.mode, "bass": self.bass, "treble": self.treble}


@dataclass(frozen=True, slots=True)
class DeviceStatus:
    """Snapshot of the receiver's main zone at a point in time.

    Created on each successful status fetch and never mutated. Commands
    change the remote device only; a fresh fetch is needed to observe them.

    Attributes:
        volume: Current master volume, 0 to max_volume.
        max_volume: Maximum master volume.
        subwoofer_volume: Signed subwoofer offset in [-12, 12].
        actual_volume: Device display value (informational only).
        dialogue_level: Dialogue lift level in [0, 3].
        tone_control: Tone mode with bass and treble levels.
        pure_direct: Pure Direct enabled.
        enhancer: Enhancer enabled.
        extra_bass: Extra Bass enabled.
        adaptive_drc: Adaptive dynamic range control enabled.
    """

    volume: int
    max_volume: int
    subwoofer_volume: int
    actual_volume: float
    dialogue_level: int
    tone_control: ToneControl
    pure_direct: bool = False
    enhancer: bool = False
    extra_bass: bool = False
    adaptive_drc: bool = False

    def __post_init__(self) -> None:
        """Warn about values outside the documented ranges."""
        if not 0 <= self.volume <= self.max_volume:
            logger.warning("Volume %d outside 0-%d", self.volume, self.max_volume)
        if not SUBWOOFER_MIN <= self.subwoofer_volume <= SUBWOOFER_MAX:
            logger.warning("Subwoofer volume %d out of range", self.subwoofer_volume)
        if not DIALOGUE_MIN <= self.dialogue_level <= DIALOGUE_MAX:
            logger.warning("Dialogue level %d out of range", self.dialogue_level)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DeviceStatus":
        """Decode a ``getStatus`` response body.

        Fields the model does not know about are ignored.

        Args:
            data: Parsed JSON object.

        Returns:
            The decoded status.

        Raises:
            KeyError: If a required field is missing.
            TypeError: If a field has the wrong type.
        """
        actual = _require_object(data, "actual_volume")
        actual_value = actual["value"]
        if isinstance(actual_value, bool) or not isinstance(actual_value, int | float):
            raise TypeError(
                f"field 'actual_volume.value' must be a number, got {type(actual_value).__name__}"
            )

        return cls(
            volume=_require_int(data, "volume"),
            max_volume=_require_int(data, "max_volume"),
            subwoofer_volume=_require_int(data, "subwoofer_volume"),
            actual_volume=float(actual_value),
            dialogue_level=_require_int(data, "dialogue_level"),
            tone_control=ToneControl.from_dict(_require_object(data, "tone_control")),
            pure_direct=_require_bool(data, "pure_direct"),
            enhancer=_require_bool(data, "enhancer"),
            extra_bass=_require_bool(data, "extra_bass"),
            adaptive_drc=_require_bool(data, "adaptive_drc"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert back to the ``getStatus`` JSON shape."""
        return {
            "volume": self.volume,
            "max_volume": self.max_volume,
            "subwoofer_volume": self.subwoofer_volume,
            "pure_direct": self.pure_direct,
            "enhancer": self.enhancer,
            "adaptive_drc": self.adaptive_drc,
            "extra_bass": self.extra_bass,
            "actual_volume": {"value": self.actual_volume},
            "dialogue_level": self.dialogue_level,
            "tone_control": self.tone_control.to_dict(),
        }

    @property
    def toggles(self) -> dict[Toggle, bool]:
        """Return all toggle states keyed by Toggle."""
        return {toggle: self.toggle_state(toggle) for toggle in Toggle}

    def toggle_state(self, toggle: Toggle) -> bool:
        """Return the reported state of a single toggle."""
        return bool(getattr(self, toggle.value))

    @property
    def display_volume(self) -> str:
        """Return the device display volume for labels (e.g. "-35.0", "-35.5")."""
        return f"{self.actual_volume:.1f}"
