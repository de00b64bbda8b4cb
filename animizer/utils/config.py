"""Configuration management."""

import json
import yaml
from enum import Enum
from typing import Union
from pathlib import Path
from dataclasses import dataclass, asdict


class PathProfile(Enum):
    """How image sources are stored in and restored from a document."""
    # Stored relative to the output directory, resolved to absolute on decode
    OUTPUT_DIR = "output_dir"
    # Stored relative to the working directory at encode time, kept verbatim on decode
    WORKING_DIR = "working_dir"


DUPLICATE_POLICIES = ("last_wins", "reject")


@dataclass
class CodecConfig:
    """Codec configuration."""
    # Image source paths
    path_profile: Union[str, PathProfile] = "output_dir"

    # Output formatting
    extension: str = ".animset"
    indent: str = "  "
    encoding: str = "utf-8"
    xml_declaration: bool = True

    # What decode does when an animation name repeats
    duplicate_animations: str = "last_wins"

    def __post_init__(self):
        if isinstance(self.path_profile, PathProfile):
            self.path_profile = self.path_profile.value
        try:
            PathProfile(self.path_profile)
        except ValueError:
            raise ValueError(
                f"Unknown path_profile: {self.path_profile}. "
                f"Available: {[p.value for p in PathProfile]}"
            )

        if self.duplicate_animations not in DUPLICATE_POLICIES:
            raise ValueError(
                f"Unknown duplicate_animations policy: {self.duplicate_animations}. "
                f"Available: {list(DUPLICATE_POLICIES)}"
            )

        if not self.extension.startswith('.'):
            self.extension = '.' + self.extension

    @property
    def profile(self) -> PathProfile:
        return PathProfile(self.path_profile)


def load_config(config_path: str) -> CodecConfig:
    """Load configuration from file.
    
    Args:
        config_path: Path to config file (.json or .yaml)
        
    Returns:
        CodecConfig object
    """
    config_path = Path(config_path)
    
    with open(config_path, 'r') as f:
        if config_path.suffix in ('.yaml', '.yml'):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)
    
    return CodecConfig(**(data or {}))


def save_config(config: CodecConfig, output_path: str):
    """Save configuration to file.
    
    Args:
        config: CodecConfig object
        output_path: Output file path (.json or .yaml)
    """
    output_path = Path(output_path)
    data = asdict(config)
    
    with open(output_path, 'w') as f:
        if output_path.suffix in ('.yaml', '.yml'):
            yaml.safe_dump(data, f, default_flow_style=False)
        else:
            json.dump(data, f, indent=2)
