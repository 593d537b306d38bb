"""Configuration loading."""

from stat_inference_engine.config.loader import load_config_file, load_config_with_precedence, parse_bool

__all__ = ["load_config_file", "load_config_with_precedence", "parse_bool"]
