# app/collection/config.py
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Mapping, Optional

from app.collection.classifier import RANDOM_FALLBACK, normalize_payer_id, random_terminal_status
from app.collection.model import FAILED, PENDING, STATUSES, SUCCESSFUL, TERMINAL_STATUSES
from settings import settings

FINAL_POLICIES = ("fixed", "random")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class DelayPolicy:
    min_s: float
    max_s: float
    step_s: float = 60.0

    @property
    def is_fixed(self) -> bool:
        return self.max_s <= self.min_s

    def draw(self, rng: random.Random | None = None) -> float:
        # whole steps between min and max, inclusive
        if self.is_fixed:
            return self.min_s
        r = rng or random
        steps = int((self.max_s - self.min_s) // self.step_s)
        return self.min_s + r.randint(0, steps) * self.step_s


@dataclass(frozen=True)
class FinalStatusPolicy:
    mode: str  # "fixed" | "random"
    table: Mapping[str, str] = field(default_factory=dict)

    def resolve(self, payer_id: str, rng: random.Random | None = None) -> str:
        if self.mode == "fixed":
            status = self.table.get(normalize_payer_id(payer_id))
            if status is not None:
                return status
        return random_terminal_status(rng)


@dataclass(frozen=True)
class EngineConfig:
    profile: str
    status_table: Mapping[str, str]
    fallback: str
    final_policy: FinalStatusPolicy
    delay: DelayPolicy

    def describe(self) -> dict:
        return {
            "profile": self.profile,
            "status_table": dict(self.status_table),
            "fallback": self.fallback,
            "final_policy": self.final_policy.mode,
            "final_status_table": dict(self.final_policy.table),
            "delay_min_s": self.delay.min_s,
            "delay_max_s": self.delay.max_s,
            "delay_step_s": self.delay.step_s,
        }


# The three behaviours the mock has shipped with.
PROFILES: dict[str, EngineConfig] = {
    # current collection mock: 233-prefixed test numbers, deterministic outcomes
    "collection": EngineConfig(
        profile="collection",
        status_table={
            "233900800111": SUCCESSFUL,
            "233900800112": SUCCESSFUL,
            "233900800113": SUCCESSFUL,
            "233900800114": FAILED,
            "233900800115": FAILED,
            "233900800116": PENDING,
            "233900800117": PENDING,
        },
        fallback=RANDOM_FALLBACK,
        final_policy=FinalStatusPolicy(
            mode="fixed",
            table={
                "233900800116": FAILED,
                "233900800117": SUCCESSFUL,
            },
        ),
        delay=DelayPolicy(min_s=300.0, max_s=300.0),
    ),
    # sandbox mock: 231-prefixed numbers, coin-flip resolution after 3-4 minutes
    "sandbox": EngineConfig(
        profile="sandbox",
        status_table={
            "231233550000001": PENDING,
            "231231233550000001": PENDING,
            "231233550000002": FAILED,
        },
        fallback=SUCCESSFUL,
        final_policy=FinalStatusPolicy(mode="random"),
        delay=DelayPolicy(min_s=180.0, max_s=240.0, step_s=60.0),
    ),
    # first mock: same table as sandbox, 12-13 minutes before resolution
    "legacy": EngineConfig(
        profile="legacy",
        status_table={
            "231233550000001": PENDING,
            "231231233550000001": PENDING,
            "231233550000002": FAILED,
        },
        fallback=SUCCESSFUL,
        final_policy=FinalStatusPolicy(mode="random"),
        delay=DelayPolicy(min_s=720.0, max_s=780.0, step_s=60.0),
    ),
}


def _normalize_status(value: str, *, allowed: frozenset[str], key: str) -> str:
    v = (value or "").strip().upper()
    if v not in allowed:
        raise ConfigError(f"{key}={value!r} (allowed: {', '.join(sorted(allowed))})")
    return v


def _normalize_table(raw: Mapping[str, str], *, allowed: frozenset[str], key: str) -> dict[str, str]:
    return {
        normalize_payer_id(k): _normalize_status(v, allowed=allowed, key=f"{key}[{k}]")
        for k, v in raw.items()
    }


def profile_name() -> str:
    return (settings.MOMO_PROFILE or "collection").strip().lower()


def engine_config(name: Optional[str] = None) -> EngineConfig:
    """Profile preset with any MOMO_* overrides from settings applied."""
    name = (name or profile_name()).strip().lower()
    base = PROFILES.get(name)
    if base is None:
        raise ConfigError(f"MOMO_PROFILE={name!r} (allowed: {', '.join(sorted(PROFILES))})")

    status_table = dict(base.status_table)
    if settings.MOMO_STATUS_TABLE is not None:
        status_table = _normalize_table(settings.MOMO_STATUS_TABLE, allowed=STATUSES, key="MOMO_STATUS_TABLE")

    fallback = base.fallback
    if settings.MOMO_FALLBACK_STATUS:
        fallback = _normalize_status(
            settings.MOMO_FALLBACK_STATUS,
            allowed=frozenset({RANDOM_FALLBACK, *TERMINAL_STATUSES}),
            key="MOMO_FALLBACK_STATUS",
        )

    final_mode = base.final_policy.mode
    if settings.MOMO_FINAL_POLICY:
        final_mode = settings.MOMO_FINAL_POLICY.strip().lower()
        if final_mode not in FINAL_POLICIES:
            raise ConfigError(f"MOMO_FINAL_POLICY={settings.MOMO_FINAL_POLICY!r} (allowed: fixed, random)")

    final_table = dict(base.final_policy.table)
    if settings.MOMO_FINAL_STATUS_TABLE is not None:
        final_table = _normalize_table(
            settings.MOMO_FINAL_STATUS_TABLE,
            allowed=TERMINAL_STATUSES,
            key="MOMO_FINAL_STATUS_TABLE",
        )

    min_s = settings.MOMO_DELAY_MIN_S if settings.MOMO_DELAY_MIN_S is not None else base.delay.min_s
    if settings.MOMO_DELAY_MAX_S is not None:
        max_s = settings.MOMO_DELAY_MAX_S
    elif settings.MOMO_DELAY_MIN_S is not None:
        # min alone means a fixed delay
        max_s = min_s
    else:
        max_s = base.delay.max_s
    step_s = settings.MOMO_DELAY_STEP_S if settings.MOMO_DELAY_STEP_S is not None else base.delay.step_s
    if min_s < 0 or max_s < min_s:
        raise ConfigError(f"MOMO_DELAY_MIN_S/MOMO_DELAY_MAX_S=({min_s}, {max_s})")
    if step_s <= 0:
        raise ConfigError(f"MOMO_DELAY_STEP_S={step_s}")

    return EngineConfig(
        profile=name,
        status_table=status_table,
        fallback=fallback,
        final_policy=FinalStatusPolicy(mode=final_mode, table=final_table),
        delay=DelayPolicy(min_s=float(min_s), max_s=float(max_s), step_s=float(step_s)),
    )
