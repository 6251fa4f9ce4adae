"""MCP tools for ue-enabler.

Tools:
    - list_blocks: List blocks in a project or GitHub repository
    - analyze_block_structure: Infer the structure a block expects
    - generate_block_json: Synthesize and write a block's authoring schema
    - generate_base_configs: Write built-in schemas and aggregation templates
    - validate_block_json: Validate an authoring schema
    - validate_setup: Check a project's Universal Editor setup
"""

from .analysis import analyze_block_structure, list_blocks
from .generation import generate_base_configs, generate_block_json
from .validation import validate_block_json, validate_setup

__all__ = [
    "list_blocks",
    "analyze_block_structure",
    "generate_block_json",
    "generate_base_configs",
    "validate_block_json",
    "validate_setup",
]
