"""Pre-processor factory and exports."""

from typing import Any

from ..config import PreProcessorType
from .consistency import ConsistencyPreProcessor, supported_values


def create_preprocessor(
    preprocessor_type: PreProcessorType,
    config: dict[str, Any] | None = None,
) -> ConsistencyPreProcessor | None:
    """Create a pre-processor instance based on type.

    Args:
        preprocessor_type: Type of pre-processor to create
        config: Optional config dict to pass to the pre-processor

    Returns:
        PreProcessor instance or None if type is NONE
    """
    if preprocessor_type == PreProcessorType.NONE:
        return None

    if preprocessor_type == PreProcessorType.CONSISTENCY:
        return ConsistencyPreProcessor(config=config)

    msg = f"Unknown preprocessor type: {preprocessor_type}"
    raise ValueError(msg)


__all__ = ["ConsistencyPreProcessor", "create_preprocessor", "supported_values"]
