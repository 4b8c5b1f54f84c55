from __future__ import annotations

from core.economics import AffineCurve
from core.solver import EquilibriumSolver
from diagrams.base import DiagramModel, DiagramResult, DiagramType
from formatting.renderers import RenderContext, polygon_area
from schemas.parameters import SupplyDemandParameters


class SupplyDemandDiagram(DiagramModel):
    """Competitive market: one equilibrium with consumer and producer surplus."""

    diagram_type = DiagramType.SUPPLY_DEMAND
    title = "Supply and Demand"
    explanation = (
        "Demand slopes down and supply slopes up; where they cross the market "
        "clears. The green area is consumer surplus and the blue area producer "
        "surplus at that price."
    )
    parameters_model = SupplyDemandParameters

    def draw(self, ctx: RenderContext, params: SupplyDemandParameters) -> DiagramResult:
        params = self.coerce(params)
        colors = ctx.style.colors
        ctx.begin(self.x_label, self.y_label)

        demand = AffineCurve(params.demand_intercept, params.demand_slope)
        supply = AffineCurve(params.supply_intercept, params.supply_slope)

        ctx.curves.draw_curve(demand, colors.demand)
        ctx.curves.draw_curve(supply, colors.supply)

        eq = EquilibriumSolver(ctx.mapper.bounds.max_quantity).solve(demand, supply)
        self.mark_equilibrium(ctx, eq, colors.equilibrium)
        ctx.annotations.label_at(eq.quantity, eq.price, f"Equilibrium ({self.describe(eq)})",
                                 colors.equilibrium)

        consumer_surplus = [
            (0, params.demand_intercept),
            (eq.quantity, params.demand_intercept),
            (eq.quantity, eq.price),
        ]
        producer_surplus = [
            (0, params.supply_intercept),
            (eq.quantity, params.supply_intercept),
            (eq.quantity, eq.price),
        ]
        ctx.regions.fill_region(consumer_surplus, colors.consumer_surplus)
        ctx.regions.fill_region(producer_surplus, colors.producer_surplus)

        return DiagramResult.build(self.diagram_type, params, {
            "equilibrium": eq,
            "consumer_surplus": polygon_area(consumer_surplus),
            "producer_surplus": polygon_area(producer_surplus),
        })
