"""Schema synthesizer: authoring schemas from analysis records and built-ins."""

from ue_enabler.generator.lib import (
    BASE_CONFIG_FILES,
    TEMPLATE_CONFIG_FILES,
    capitalize_block_name,
    generate_base_configs,
    generate_block_definitions,
    generate_block_filters,
    generate_block_models,
    generate_component_definition_template,
    generate_component_filters_template,
    generate_component_models_template,
    generate_image_config,
    generate_page_config,
    generate_section_config,
    generate_text_config,
    synthesize,
)

__all__ = [
    "BASE_CONFIG_FILES",
    "TEMPLATE_CONFIG_FILES",
    "capitalize_block_name",
    # Block schemas
    "generate_block_definitions",
    "generate_block_models",
    "generate_block_filters",
    "synthesize",
    # Built-ins
    "generate_page_config",
    "generate_text_config",
    "generate_image_config",
    "generate_section_config",
    # Templates
    "generate_component_definition_template",
    "generate_component_models_template",
    "generate_component_filters_template",
    "generate_base_configs",
]
