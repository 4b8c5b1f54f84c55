"""
Diagram models and the dispatch table that selects one by type.
"""

from __future__ import annotations

from typing import Dict, Union

from .base import DiagramModel, DiagramResult, DiagramType
from .elasticity import ElasticityDiagram
from .monopoly import MonopolyDiagram
from .subsidy_tariff import SubsidyTariffDiagram
from .supply_demand import SupplyDemandDiagram
from .tax_incidence import TaxIncidenceDiagram

DIAGRAMS: Dict[DiagramType, DiagramModel] = {
    DiagramType.SUPPLY_DEMAND: SupplyDemandDiagram(),
    DiagramType.SUBSIDY_TARIFF: SubsidyTariffDiagram(),
    DiagramType.ELASTICITY: ElasticityDiagram(),
    DiagramType.MONOPOLY: MonopolyDiagram(),
    DiagramType.TAX_INCIDENCE: TaxIncidenceDiagram(),
}


def get_diagram(diagram_type: Union[DiagramType, str]) -> DiagramModel:
    """Look up a diagram by enum member or by its key (e.g. 'tax-incidence')."""
    return DIAGRAMS[DiagramType(diagram_type)]


__all__ = [
    "DIAGRAMS",
    "DiagramModel",
    "DiagramResult",
    "DiagramType",
    "ElasticityDiagram",
    "MonopolyDiagram",
    "SubsidyTariffDiagram",
    "SupplyDemandDiagram",
    "TaxIncidenceDiagram",
    "get_diagram",
]
