"""
Reusable validators for settings and request models.

Used with Pydantic @field_validator so that a bad policy or strategy name
fails at configuration time instead of halfway through a parse.
"""

from pathlib import Path
from typing import Tuple

BOUNDARY_POLICIES: Tuple[str, ...] = ('last_field', 'repeat_sentinel')
LOOKUP_STRATEGIES: Tuple[str, ...] = ('index', 'sorted', 'linear')


def validate_boundary_policy(name: str) -> str:
    """
    Validate a record-boundary policy name.
    
    Args:
        name: Policy name (e.g., 'last_field')
    
    Returns:
        The validated name (unchanged if valid)
    
    Raises:
        ValueError: If name is not a known policy
    
    Example:
        >>> validate_boundary_policy('last_field')
        'last_field'
        >>> validate_boundary_policy('first_field')  # Raises ValueError
    """
    if name not in BOUNDARY_POLICIES:
        raise ValueError(
            f"Unknown boundary policy: '{name}'\n"
            f"Valid policies: {list(BOUNDARY_POLICIES)}"
        )
    return name


def validate_lookup_strategy(name: str) -> str:
    """
    Validate a name-lookup strategy name.
    
    Args:
        name: Strategy name (e.g., 'index')
    
    Returns:
        The validated name (unchanged if valid)
    
    Raises:
        ValueError: If name is not a known strategy
    """
    if name not in LOOKUP_STRATEGIES:
        raise ValueError(
            f"Unknown lookup strategy: '{name}'\n"
            f"Valid strategies: {list(LOOKUP_STRATEGIES)}"
        )
    return name


def validate_output_path(output_path: Path, *input_paths: Path) -> Path:
    """
    Ensure the output file would not overwrite one of the inputs.
    
    Args:
        output_path: Destination of the CSV report
        *input_paths: Input XML files
    
    Returns:
        The validated output path
    
    Raises:
        ValueError: If output_path resolves to an input file
    """
    target = Path(output_path).resolve()
    for path in input_paths:
        if Path(path).resolve() == target:
            raise ValueError(
                f"Output path would overwrite input file: '{output_path}'"
            )
    return output_path
