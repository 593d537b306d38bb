"""Serializable projections and run configuration."""

from stat_inference_engine.schema.generation_result import GenerationResult, SavedResult
from stat_inference_engine.schema.run_config import ERROR_MODES, ErrorMode, RunConfig

__all__ = ["ERROR_MODES", "ErrorMode", "GenerationResult", "RunConfig", "SavedResult"]
