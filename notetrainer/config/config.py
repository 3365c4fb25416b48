from __future__ import annotations

"""Configuration loading and validation for notetrainer.

This module loads YAML configuration, applies defaults, and validates
that enumerations and paths are sane for the CLI.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml

from ..drills.modes import MODE_ALIASES


ALLOWED_BACKENDS = {"none", "fluidsynth"}
ALLOWED_TEST_MODES = set(MODE_ALIASES)


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"ERROR: Config file {path} is not valid YAML: {e}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(data, dict):
        print(f"ERROR: Config file {path} must contain a mapping", file=sys.stderr)
        sys.exit(1)
    return data


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        cfg = _load_yaml(Path(path))
    else:
        default_path = Path(__file__).with_name("defaults.yml")
        cfg = _load_yaml(default_path)
    return cfg


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Unknown enum values fall back to defaults with a warning. The soundfont
    must exist when the FluidSynth backend is selected.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    # Shallow defaults for missing sections
    for section in ("storage", "audio", "player", "test", "progress", "leaderboard", "reports"):
        if not isinstance(cfg.get(section), dict):
            cfg[section] = {}

    storage = cfg["storage"]
    audio = cfg["audio"]
    player = cfg["player"]
    test = cfg["test"]
    progress = cfg["progress"]
    board = cfg["leaderboard"]
    reports = cfg["reports"]

    storage.setdefault("path", "./notetrainer_data/prefs.json")

    audio.setdefault("backend", "none")
    audio.setdefault("soundfont_path", "./soundfonts/GrandPiano.sf2")
    audio.setdefault("sample_rate", 44100)
    audio.setdefault("gain", 0.5)
    audio.setdefault("note_ms", 600)
    audio.setdefault("octave", 4)

    player.setdefault("default_name", "Guest")

    test.setdefault("mode", "mixed")
    test.setdefault("options", 4)

    progress.setdefault("days", 7)
    progress.setdefault("per_category_counter", False)

    board.setdefault("accuracy_by_mode", False)
    board.setdefault("limit", 20)

    reports.setdefault("output_dir", "./reports")

    # Enum validations
    backend = audio.get("backend")
    if backend not in ALLOWED_BACKENDS:
        print(f"WARNING: Unsupported audio backend '{backend}', falling back to 'none'.")
        audio["backend"] = "none"

    mode = str(test.get("mode", "")).lower()
    if mode not in ALLOWED_TEST_MODES:
        print(f"WARNING: Unsupported test mode '{test.get('mode')}', using 'mixed'.")
        mode = "mixed"
    test["mode"] = mode

    try:
        options = int(test.get("options", 4))
    except (TypeError, ValueError):
        options = 4
    if not 2 <= options <= 7:
        print(f"WARNING: test.options must be between 2 and 7, got {options}; using 4.")
        options = 4
    test["options"] = options

    name = str(player.get("default_name") or "").strip()
    player["default_name"] = name or "Guest"

    progress["days"] = max(1, int(progress.get("days", 7)))
    progress["per_category_counter"] = bool(progress.get("per_category_counter"))
    board["accuracy_by_mode"] = bool(board.get("accuracy_by_mode"))
    board["limit"] = max(0, int(board.get("limit", 20)))

    # Ensure soundfont exists for FluidSynth
    if audio["backend"] == "fluidsynth":
        sf_path = Path(audio.get("soundfont_path", ""))
        if not sf_path.exists():
            print(
                f"ERROR: SoundFont not found at '{sf_path}'. Place a .sf2 in ./soundfonts and update the path.",
                file=sys.stderr,
            )
            sys.exit(1)

    return cfg
