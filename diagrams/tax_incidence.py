from __future__ import annotations

from typing import Dict

from core.economics import AffineCurve, ieee_divide
from core.solver import EquilibriumSolver
from diagrams.base import DiagramModel, DiagramResult, DiagramType, ResultValue
from formatting.renderers import RenderContext, round_label
from schemas.parameters import TaxIncidenceParameters


class TaxIncidenceDiagram(DiagramModel):
    """
    Per-unit tax levied on sellers, split between buyers and sellers.

    The burdens always add up to the tax: buyers pay the rise in the
    market price, sellers absorb the rest.
    """

    diagram_type = DiagramType.TAX_INCIDENCE
    title = "Tax Incidence"
    explanation = (
        "Who bears a tax depends on elasticities, not on who writes the check. "
        "The less elastic side of the market carries more of the burden. Green "
        "is the buyers' share per unit, blue the sellers', and the amber "
        "triangle the deadweight loss."
    )
    parameters_model = TaxIncidenceParameters

    def draw(self, ctx: RenderContext, params: TaxIncidenceParameters) -> DiagramResult:
        params = self.coerce(params)
        colors = ctx.style.colors
        ann = ctx.annotations
        solver = EquilibriumSolver(ctx.mapper.bounds.max_quantity)
        ctx.begin(self.x_label, self.y_label)

        demand = AffineCurve(params.demand_intercept, params.demand_slope)
        supply = AffineCurve(params.supply_intercept, params.supply_slope)
        original = solver.solve(demand, supply)

        ctx.curves.draw_curve(demand, colors.demand)
        ctx.curves.draw_curve(supply, colors.supply)
        ann.draw_point(original.quantity, original.price, colors.equilibrium)

        values: Dict[str, ResultValue] = {"original": original}
        tax = params.tax_amount
        if tax <= 0:
            return DiagramResult.build(self.diagram_type, params, values)

        taxed_supply = supply.shifted(tax)
        ctx.curves.draw_curve(taxed_supply, colors.tariffed_supply)

        taxed = solver.solve(demand, taxed_supply)
        ann.draw_point(taxed.quantity, taxed.price, colors.new_equilibrium)

        producer_price = taxed.price - tax

        ann.draw_dashed_hline(taxed.price, colors.tariffed_supply)
        ann.draw_dashed_hline(producer_price, colors.supply)
        ann.draw_dashed_hline(original.price, colors.equilibrium)
        ann.draw_dashed_vline(taxed.quantity, colors.new_equilibrium)

        self.label_price_line(ctx, taxed.price, f"Consumer Price: {round_label(taxed.price)}",
                              colors.tariffed_supply)
        self.label_price_line(ctx, producer_price, f"Producer Price: {round_label(producer_price)}",
                              colors.supply)
        self.label_price_line(ctx, original.price, f"Original Price: {round_label(original.price)}",
                              colors.equilibrium)

        consumer_burden = taxed.price - original.price
        producer_burden = original.price - producer_price

        ctx.regions.fill_region(
            [
                (0, original.price),
                (taxed.quantity, original.price),
                (taxed.quantity, taxed.price),
                (0, taxed.price),
            ],
            colors.consumer_surplus,
        )
        ctx.regions.fill_region(
            [
                (0, producer_price),
                (taxed.quantity, producer_price),
                (taxed.quantity, original.price),
                (0, original.price),
            ],
            colors.producer_surplus,
        )
        ctx.regions.fill_region(
            [
                (taxed.quantity, taxed.price),
                (original.quantity, original.price),
                (taxed.quantity, producer_price),
            ],
            colors.deadweight_loss,
            colors.deadweight_loss_border,
        )

        values.update({
            "taxed": taxed,
            "producer_price": producer_price,
            "consumer_burden": consumer_burden,
            "producer_burden": producer_burden,
            "consumer_share": ieee_divide(consumer_burden, tax) * 100,
            "producer_share": ieee_divide(producer_burden, tax) * 100,
            "tax_revenue": tax * taxed.quantity,
            # Closed-form triangle, independent of solver precision
            "deadweight_loss": (original.quantity - taxed.quantity) * tax / 2,
        })
        return DiagramResult.build(self.diagram_type, params, values)
