"""
Report models: pipeline inputs and the combined output rows.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from irs_error_parser.validators import validate_output_path


class OutputRow(BaseModel):
    """
    One line of the combined error report.
    
    Produced once per error record. Name fields are None when no name
    record shares the error's key; the report writer renders them as
    empty cells so every line keeps all four columns.
    
    Example:
        >>> OutputRow(record_id=3, error_text='Bad DOB').as_cells()
        (3, 'Bad DOB', '', '')
    """
    
    record_id: int = Field(..., ge=0, description="Shared record key")
    error_text: str = Field(..., description="IRS error message")
    first_name: Optional[str] = Field(default=None, description="Matched first name")
    last_name: Optional[str] = Field(default=None, description="Matched last name")
    
    model_config = ConfigDict(frozen=True)
    
    @property
    def is_matched(self) -> bool:
        """True if a name record was found for this error."""
        return self.first_name is not None or self.last_name is not None
    
    def as_cells(self) -> tuple:
        """Row values in report column order, missing names as ''."""
        return (
            self.record_id,
            self.error_text,
            self.first_name or '',
            self.last_name or '',
        )


class InputPaths(BaseModel):
    """
    The three files one report run works on.
    
    Attributes:
        error_file: IRS acknowledgement XML with error records
        name_file: Submission XML with name records
        output_file: Destination CSV report
    
    Raises:
        ValidationError: If output_file points at one of the inputs
    """
    
    error_file: Path = Field(..., description="Acknowledgement XML (error records)")
    name_file: Path = Field(..., description="Submission XML (name records)")
    output_file: Path = Field(..., description="CSV report destination")
    
    model_config = ConfigDict(frozen=True)
    
    @model_validator(mode='after')
    def check_output_is_not_input(self) -> 'InputPaths':
        validate_output_path(self.output_file, self.error_file, self.name_file)
        return self
    
    def missing_inputs(self) -> list:
        """Input files that do not exist (empty list if both are present)."""
        return [p for p in (self.error_file, self.name_file) if not p.is_file()]
