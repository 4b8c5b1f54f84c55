"""
Parameter records exchanged between the input form, the diagram models and
the exporters.
"""

from .parameters import (
    DiagramParameters,
    SupplyDemandParameters,
    SubsidyTariffParameters,
    ElasticityParameters,
    MonopolyParameters,
    TaxIncidenceParameters,
    PARAMETER_MODELS,
    ParameterError,
    default_parameters,
    parse_parameters,
)

__all__ = [
    "DiagramParameters",
    "SupplyDemandParameters",
    "SubsidyTariffParameters",
    "ElasticityParameters",
    "MonopolyParameters",
    "TaxIncidenceParameters",
    "PARAMETER_MODELS",
    "ParameterError",
    "default_parameters",
    "parse_parameters",
]
