from __future__ import annotations

from typing import Dict

from core.economics import AffineCurve
from core.solver import EquilibriumSolver
from diagrams.base import DiagramModel, DiagramResult, DiagramType, ResultValue
from formatting.renderers import RenderContext, round_label
from schemas.parameters import SubsidyTariffParameters


class SubsidyTariffDiagram(DiagramModel):
    """
    Compares a per-unit subsidy with a per-unit tariff on the same market.

    Each policy shifts the supply curve by its amount (down for the
    subsidy, up for the tariff) and is drawn only when its amount is
    positive. Both can be active at once.
    """

    diagram_type = DiagramType.SUBSIDY_TARIFF
    title = "Subsidy vs Tariff"
    explanation = (
        "A subsidy pays producers per unit and moves supply down, lowering the "
        "price buyers pay and raising quantity. A tariff taxes each unit and "
        "moves supply up, raising the price and cutting quantity. The amber "
        "triangles are the deadweight loss of each policy."
    )
    parameters_model = SubsidyTariffParameters

    def draw(self, ctx: RenderContext, params: SubsidyTariffParameters) -> DiagramResult:
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

        if params.subsidy_amount > 0:
            subsidized_supply = supply.shifted(-params.subsidy_amount)
            ctx.curves.draw_curve(subsidized_supply, colors.subsidized_supply)

            subsidized = solver.solve(demand, subsidized_supply)
            ann.draw_point(subsidized.quantity, subsidized.price, colors.new_equilibrium)

            # Sellers receive what buyers pay plus the subsidy
            producer_price = subsidized.price + params.subsidy_amount
            ann.draw_dashed_hline(subsidized.price, colors.subsidized_supply)
            ann.draw_dashed_hline(producer_price, colors.supply)
            ann.draw_dashed_vline(subsidized.quantity, colors.new_equilibrium)

            self.label_price_line(ctx, subsidized.price,
                                  f"Consumer Price: {round_label(subsidized.price)}",
                                  colors.subsidized_supply)
            self.label_price_line(ctx, producer_price,
                                  f"Producer Price: {round_label(producer_price)}",
                                  colors.supply)

            deadweight = [
                (original.quantity, supply(original.quantity)),
                (subsidized.quantity, supply(subsidized.quantity)),
                (subsidized.quantity, subsidized_supply(subsidized.quantity)),
            ]
            ctx.regions.fill_region(deadweight, colors.deadweight_loss,
                                    colors.deadweight_loss_border)

            values["subsidized"] = subsidized
            values["subsidy_producer_price"] = producer_price
            values["total_subsidy_cost"] = params.subsidy_amount * subsidized.quantity

        if params.tariff_amount > 0:
            tariffed_supply = supply.shifted(params.tariff_amount)
            ctx.curves.draw_curve(tariffed_supply, colors.tariffed_supply)

            tariffed = solver.solve(demand, tariffed_supply)
            ann.draw_point(tariffed.quantity, tariffed.price, colors.new_equilibrium)

            # Sellers keep what buyers pay minus the tariff
            producer_price = tariffed.price - params.tariff_amount
            ann.draw_dashed_hline(tariffed.price, colors.tariffed_supply)
            ann.draw_dashed_hline(producer_price, colors.supply)
            ann.draw_dashed_vline(tariffed.quantity, colors.new_equilibrium)

            self.label_price_line(ctx, tariffed.price,
                                  f"Consumer Price: {round_label(tariffed.price)}",
                                  colors.tariffed_supply)
            self.label_price_line(ctx, producer_price,
                                  f"Producer Price: {round_label(producer_price)}",
                                  colors.supply)

            deadweight = [
                (tariffed.quantity, tariffed_supply(tariffed.quantity)),
                (original.quantity, tariffed_supply(original.quantity)),
                (original.quantity, supply(original.quantity)),
            ]
            ctx.regions.fill_region(deadweight, colors.deadweight_loss,
                                    colors.deadweight_loss_border)

            values["tariffed"] = tariffed
            values["tariff_producer_price"] = producer_price
            values["total_tariff_revenue"] = params.tariff_amount * tariffed.quantity

        return DiagramResult.build(self.diagram_type, params, values)
