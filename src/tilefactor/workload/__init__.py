"""
Workload shape definitions.
"""

from tilefactor.workload.problem import (
    DataType,
    Dimension,
    WeightDimension,
    InputDimension,
    OutputDimension,
    DATA_TYPE_NAME,
    DATA_TYPE_ID,
    DIMENSION_NAME,
    DIMENSION_ID,
    PerDataSpace,
    PerProblemDimension,
    WorkloadConfig,
    get_max_working_set_sizes,
    is_read_write_data_type,
)

__all__ = [
    "DataType",
    "Dimension",
    "WeightDimension",
    "InputDimension",
    "OutputDimension",
    "DATA_TYPE_NAME",
    "DATA_TYPE_ID",
    "DIMENSION_NAME",
    "DIMENSION_ID",
    "PerDataSpace",
    "PerProblemDimension",
    "WorkloadConfig",
    "get_max_working_set_sizes",
    "is_read_write_data_type",
]
