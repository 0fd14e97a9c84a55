"""Rich rendering of resolved namespaces and capability snapshots.

Pure functions: build renderables, never print.
"""

from __future__ import annotations

import json

from rich.table import Table
from rich.text import Text

from stream_prefs.app.settings import SettingDescription, SettingsFacade
from stream_prefs.core.capabilities import TIER_ORDER, CapabilitySnapshot


def format_value(value: object) -> str:
    """Compact JSON-ish text for a preference value."""
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)


def _domain_text(desc: SettingDescription) -> str:
    if desc.options is not None:
        return ", ".join(value for value, _label in desc.options)
    if desc.range is not None:
        low, high, step = desc.range
        return f"{low}..{high} step {step}"
    return ""


def _suggest_text(desc: SettingDescription) -> str:
    if desc.suggest is None:
        return ""
    return ", ".join(f"{end}={format_value(value)}" for end, value in desc.suggest.ends())


def render_namespace(facade: SettingsFacade, *, include_unsupported: bool = True) -> Table:
    """Table of every setting in a namespace with its effective value."""
    table = Table(title=f"namespace: {facade.name}", title_justify="left")
    table.add_column("key", style="bold")
    table.add_column("kind")
    table.add_column("value")
    table.add_column("default", style="dim")
    table.add_column("domain", overflow="fold")
    table.add_column("suggest")

    for key in facade.keys():
        desc = facade.describe(key)
        if desc.unsupported and not include_unsupported:
            continue
        value = Text(format_value(desc.value))
        if desc.value != desc.default:
            value.stylize("green")
        table.add_row(
            Text(key, style="strike dim" if desc.unsupported else ""),
            desc.kind,
            value,
            format_value(desc.default),
            _domain_text(desc),
            _suggest_text(desc),
        )
    return table


def render_capabilities(snapshot: CapabilitySnapshot) -> Text:
    """One-line summary of a capability snapshot."""
    text = Text("capabilities: ")
    text.append(", ".join(sorted(snapshot.tags)) or "none", style="cyan")
    text.append("  device: ")
    text.append(snapshot.device_class, style="cyan")
    tiers = [tier.value for tier in TIER_ORDER if tier in snapshot.codec_tiers]
    text.append("  codec tiers: ")
    text.append(", ".join(tiers) or "none", style="cyan")
    return text
