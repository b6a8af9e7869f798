"""
Extraction Presets Library - Named option combinations
Lets users pick a full extraction policy with a single flag
"""

import logging
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from dataclasses import dataclass, field, asdict

from .options import ColorOptions, parse_options, option_names

logger = logging.getLogger(__name__)


# ============================================================================
# Preset Data Structures
# ============================================================================

@dataclass
class ExtractionPreset:
    """A single extraction preset"""

    name: str
    description: str = ""

    # Option flag names, see ColorOptions
    options: List[str] = field(default_factory=lambda: ['only_bright_colors'])

    # Colors to keep out of the result (hex strings or 0-1 triples)
    avoid: List[Any] = field(default_factory=list)

    # Maximum number of colors to report (0 = all)
    limit: int = 0

    tags: List[str] = field(default_factory=list)

    @property
    def flags(self) -> ColorOptions:
        return parse_options(self.options)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization"""
        data = asdict(self)
        # safe_load cannot read back tuples
        data['avoid'] = [c if isinstance(c, str) else [float(v) for v in c] for c in self.avoid]
        return {k: v for k, v in data.items() if v}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExtractionPreset':
        """Create from dictionary"""
        data = dict(data)
        if isinstance(data.get('options'), str):
            data['options'] = [o.strip() for o in data['options'].split(',') if o.strip()]

        # Filter to valid fields
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}

        preset = cls(**filtered)
        # Normalize names and fail early on unknown flags
        preset.options = option_names(preset.flags)
        return preset


# ============================================================================
# Built-in Presets
# ============================================================================

BUILTIN_PRESETS: Dict[str, Dict[str, Any]] = {
    "main": {
        "description": "Most common bright color first (default options)",
        "options": ["only_bright_colors"],
        "limit": 1,
        "tags": ["default", "accent"],
    },
    "bright": {
        "description": "Bright colors, brightest first",
        "options": ["only_bright_colors", "order_by_brightness"],
        "tags": ["bright", "accent"],
    },
    "dark": {
        "description": "Dark colors, darkest first",
        "options": ["only_dark_colors", "order_by_darkness"],
        "tags": ["dark", "background"],
    },
    "distinct": {
        "description": "Bright colors with near-duplicates removed",
        "options": ["only_bright_colors", "only_distinct_colors"],
        "tags": ["palette", "bright"],
    },
    "vivid": {
        "description": "Distinct bright colors without white, brightest first",
        "options": ["only_bright_colors", "only_distinct_colors", "avoid_white", "order_by_brightness"],
        "limit": 5,
        "tags": ["palette", "accent", "bright"],
    },
    "muted": {
        "description": "Distinct dark colors without black, darkest first",
        "options": ["only_dark_colors", "only_distinct_colors", "avoid_black", "order_by_darkness"],
        "limit": 5,
        "tags": ["palette", "dark"],
    },
    "background": {
        "description": "All dominant colors in hit order, no sampling bias",
        "options": ["only_distinct_colors"],
        "tags": ["palette", "background"],
    },
}


# ============================================================================
# Preset Manager
# ============================================================================

class PresetManager:
    """
    Manages built-in and user-defined extraction presets.

    User presets live in YAML files, either one preset per file (named
    after the file) or several under a top-level `presets:` mapping. A
    user preset with a built-in's name replaces it.
    """

    def __init__(self, user_presets_dir: Optional[Path] = None):
        """
        Initialize preset manager.

        Args:
            user_presets_dir: Directory for user presets (default: ~/.primary-color/presets)
        """
        self.user_presets_dir = Path(user_presets_dir or Path.home() / '.primary-color' / 'presets')
        self.user_presets_dir.mkdir(parents=True, exist_ok=True)

        self._builtin: Dict[str, ExtractionPreset] = {
            name: ExtractionPreset.from_dict({'name': name, **data})
            for name, data in BUILTIN_PRESETS.items()
        }
        self._user: Dict[str, ExtractionPreset] = {}
        # User preset name -> file it was loaded from or saved to
        self._sources: Dict[str, Path] = {}

        self._load_user_presets()

    @property
    def _all(self) -> Dict[str, ExtractionPreset]:
        return {**self._builtin, **self._user}

    def _load_user_presets(self) -> None:
        for yaml_file in sorted(self.user_presets_dir.glob('*.yaml')):
            try:
                for preset in self._read_file(yaml_file):
                    self._user[preset.name] = preset
                    self._sources[preset.name] = yaml_file
            except (OSError, yaml.YAMLError, ValueError, TypeError, AttributeError) as e:
                logger.warning("Could not load preset file %s: %s", yaml_file, e)

    @staticmethod
    def _read_file(yaml_file: Path) -> List[ExtractionPreset]:
        with open(yaml_file, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            return []
        if 'presets' in data:
            return [
                ExtractionPreset.from_dict({**preset_data, 'name': name})
                for name, preset_data in data['presets'].items()
            ]
        return [ExtractionPreset.from_dict({**data, 'name': yaml_file.stem})]

    def _write_file(self, yaml_file: Path) -> None:
        """Rewrite a user file from the presets currently sourced from it"""
        names = [name for name, path in self._sources.items() if path == yaml_file]
        if not names:
            yaml_file.unlink(missing_ok=True)
            return

        if names == [yaml_file.stem]:
            data = self._user[names[0]].to_dict()
            data.pop('name', None)
        else:
            data = {'presets': {}}
            for name in names:
                entry = self._user[name].to_dict()
                entry.pop('name', None)
                data['presets'][name] = entry

        with open(yaml_file, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def get(self, name: str) -> Optional[ExtractionPreset]:
        """Get a preset by name, user presets first"""
        return self._user.get(name) or self._builtin.get(name)

    def exists(self, name: str) -> bool:
        return name in self._user or name in self._builtin

    def is_builtin(self, name: str) -> bool:
        return name in self._builtin and name not in self._user

    def source(self, name: str) -> Optional[Path]:
        """File a user preset is stored in, None for built-ins"""
        return self._sources.get(name)

    def list_all(self) -> List[str]:
        """List all preset names"""
        return sorted(self._all)

    def list_by_tag(self, tag: str) -> List[str]:
        """List presets with a specific tag"""
        tag = tag.lower()
        return sorted(
            name for name, preset in self._all.items()
            if tag in (t.lower() for t in preset.tags)
        )

    def list_tags(self) -> List[str]:
        """All tags in use, lowercased"""
        return sorted({t.lower() for preset in self._all.values() for t in preset.tags})

    def save_preset(self, preset: ExtractionPreset, filename: Optional[str] = None) -> Path:
        """
        Save a user preset.

        A preset that already has a file is rewritten in place, including
        inside a multi-preset file. Otherwise it goes to `filename`
        (default: <name>.yaml) in the user directory.

        Returns:
            Path to the file holding the preset
        """
        if filename:
            if not filename.endswith('.yaml'):
                filename += '.yaml'
            target = self.user_presets_dir / filename
        else:
            target = self._sources.get(preset.name, self.user_presets_dir / f"{preset.name}.yaml")

        previous = self._sources.get(preset.name)
        self._user[preset.name] = preset
        self._sources[preset.name] = target

        if previous is not None and previous != target:
            self._write_file(previous)
        self._write_file(target)

        logger.debug("Saved preset %s to %s", preset.name, target)
        return target

    def delete_preset(self, name: str) -> bool:
        """
        Delete a user preset, removing it from its file.

        Returns:
            True if deleted, False if not found or is builtin
        """
        if name not in self._user:
            return False

        del self._user[name]
        source = self._sources.pop(name, None)
        if source is not None:
            self._write_file(source)
        return True

    def create_preset(
        self,
        name: str,
        options: Union[str, List[str], ColorOptions],
        description: str = "",
        **kwargs
    ) -> ExtractionPreset:
        """Create a new (unsaved) preset from flag names, aliases or flags"""
        if isinstance(options, ColorOptions):
            options = option_names(options)
        return ExtractionPreset.from_dict({
            'name': name,
            'options': options,
            'description': description,
            **kwargs
        })

    def search(self, query: str) -> List[str]:
        """Search presets by name, description, tags or option flag names"""
        query = query.lower()

        def matches(name: str, preset: ExtractionPreset) -> bool:
            fields = [name, preset.description, *preset.tags, *preset.options]
            return any(query in field.lower() for field in fields)

        return sorted(name for name, preset in self._all.items() if matches(name, preset))


# ============================================================================
# Global Instance & Convenience Functions
# ============================================================================

_manager: Optional[PresetManager] = None


def get_preset_manager() -> PresetManager:
    """Get or create global preset manager"""
    global _manager
    if _manager is None:
        _manager = PresetManager()
    return _manager


def get_preset(name: str) -> Optional[ExtractionPreset]:
    """Get a preset by name"""
    return get_preset_manager().get(name)


def list_presets(tag: Optional[str] = None) -> List[str]:
    """List available presets, optionally filtered by tag"""
    manager = get_preset_manager()
    if tag:
        return manager.list_by_tag(tag)
    return manager.list_all()
