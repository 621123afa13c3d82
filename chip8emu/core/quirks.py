"""
QuirksConfig -- behavioural switches for ambiguous CHIP-8 instructions.

Historic interpreters disagree on a handful of instructions.  Each quirk
picks one of the legal behaviours; all of them default to ``False``.

===============  ===========================================================
Quirk            Effect when enabled
===============  ===========================================================
vf_reset         ``8XY1``/``8XY2``/``8XY3`` zero VF before the operation.
memory           ``FX55``/``FX65`` advance I by X + 1 afterwards.
clipping         ``DXYN`` drops pixels past the screen edge instead of
                 wrapping them.
shifting         ``8XY6``/``8XYE`` shift VX in place, ignoring VY.
jumping          ``BNNN`` adds VX (X = high nibble of NNN) instead of V0.
display_wait     The frame driver stops issuing cycles for the rest of the
                 frame once the screen has been drawn to.
===============  ===========================================================
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Iterable, Mapping


@dataclass(frozen=True)
class QuirksConfig:
    vf_reset: bool = False
    memory: bool = False
    clipping: bool = False
    shifting: bool = False
    jumping: bool = False
    display_wait: bool = False

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def names(cls) -> tuple[str, ...]:
        """All recognised quirk names, in declaration order."""
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, bool]) -> QuirksConfig:
        """Build a config from a ``{name: enabled}`` mapping.

        Raises:
            ValueError: If *mapping* contains a name that is not a quirk.
        """
        unknown = sorted(set(mapping) - set(cls.names()))
        if unknown:
            raise ValueError(
                f"unknown quirk(s): {', '.join(unknown)}; "
                f"valid names are {', '.join(cls.names())}"
            )
        return cls(**{name: bool(value) for name, value in mapping.items()})

    @classmethod
    def from_names(cls, enabled: Iterable[str]) -> QuirksConfig:
        """Build a config with exactly the quirks in *enabled* switched on."""
        return cls.from_mapping({name: True for name in enabled})

    @classmethod
    def preset(cls, name: str) -> QuirksConfig:
        """Return one of the named profiles in :data:`PRESETS`.

        Raises:
            ValueError: If *name* is not a known preset.
        """
        try:
            return PRESETS[name]
        except KeyError:
            raise ValueError(
                f"unknown quirk preset {name!r}; valid presets are {', '.join(PRESETS)}"
            ) from None

    def with_overrides(self, **flags: bool) -> QuirksConfig:
        """Return a copy with the given quirks changed."""
        unknown = sorted(set(flags) - set(self.names()))
        if unknown:
            raise ValueError(f"unknown quirk(s): {', '.join(unknown)}")
        return replace(self, **flags)

    def enabled(self) -> tuple[str, ...]:
        """Names of the quirks that are switched on."""
        return tuple(name for name in self.names() if getattr(self, name))


PRESETS: dict[str, QuirksConfig] = {
    "legacy": QuirksConfig(),
    "cosmac": QuirksConfig(vf_reset=True, memory=True, clipping=True, display_wait=True),
    "schip": QuirksConfig(clipping=True, shifting=True, jumping=True),
}
