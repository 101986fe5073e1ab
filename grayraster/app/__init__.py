from .pipeline import ImagePipeline, PipelineError, ToolSettings

__all__ = ["ImagePipeline", "PipelineError", "ToolSettings"]
