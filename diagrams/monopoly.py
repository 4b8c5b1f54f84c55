from __future__ import annotations

from core.economics import AffineCurve, ieee_divide
from diagrams.base import DiagramModel, DiagramResult, DiagramType
from formatting.renderers import RenderContext, round_label
from schemas.parameters import MonopolyParameters


class MonopolyDiagram(DiagramModel):
    """
    Single seller facing linear demand with constant marginal cost.

    Output is set where MR = MC, solved in closed form; the competitive
    benchmark is where demand meets MC.
    """

    diagram_type = DiagramType.MONOPOLY
    title = "Monopoly Pricing and Output"
    explanation = (
        "A monopolist maximizes profit where marginal revenue equals marginal "
        "cost and charges the demand price at that output. Competition would "
        "produce until price equals marginal cost; the shaded triangle is the "
        "output lost between the two."
    )
    parameters_model = MonopolyParameters
    y_label = "Price/Cost"

    def draw(self, ctx: RenderContext, params: MonopolyParameters) -> DiagramResult:
        params = self.coerce(params)
        colors = ctx.style.colors
        ann = ctx.annotations
        max_price = ctx.mapper.bounds.max_price
        ctx.begin(self.x_label, self.y_label)

        a, b, mc = params.demand_intercept, params.demand_slope, params.marginal_cost
        demand = AffineCurve(a, b)
        # Linear demand: MR keeps the intercept and doubles the slope
        marginal_revenue = AffineCurve(a, 2 * b)
        marginal_cost = AffineCurve(mc, 0.0)

        def average_cost(quantity: float) -> float:
            # Undefined at zero output; park it above the frame below q = 1
            if quantity < 1:
                return max_price
            return mc + params.fixed_cost / quantity

        ctx.curves.draw_curve(demand, colors.demand)
        ctx.curves.draw_curve(marginal_revenue, colors.monopoly_mr)
        ctx.curves.draw_curve(marginal_cost, colors.monopoly_mc)
        ctx.curves.draw_curve(average_cost, colors.monopoly_ac)

        monopoly_quantity = ieee_divide(a - mc, -2 * b)
        monopoly_price = demand(monopoly_quantity)
        competitive_quantity = ieee_divide(a - mc, -b)

        ann.draw_point(monopoly_quantity, monopoly_price, colors.equilibrium)
        ann.draw_dashed_hline(monopoly_price, colors.equilibrium)
        ann.draw_dashed_vline(monopoly_quantity, colors.equilibrium)
        ann.draw_point(monopoly_quantity, mc, colors.monopoly_mr)

        ann.label_at(monopoly_quantity, monopoly_price,
                     f"Monopoly Price: {round_label(monopoly_price)}", colors.equilibrium)
        ann.label_at(monopoly_quantity, mc - 10,
                     f"MC = MR at Q = {round_label(monopoly_quantity)}", colors.monopoly_mr)

        ctx.regions.fill_region(
            [
                (monopoly_quantity, monopoly_price),
                (monopoly_quantity, mc),
                (competitive_quantity, mc),
            ],
            colors.deadweight_loss,
            colors.deadweight_loss_border,
        )

        total_revenue = monopoly_price * monopoly_quantity
        total_cost = params.fixed_cost + mc * monopoly_quantity

        return DiagramResult.build(self.diagram_type, params, {
            "monopoly_quantity": monopoly_quantity,
            "monopoly_price": monopoly_price,
            "competitive_quantity": competitive_quantity,
            "competitive_price": mc,
            "profit": total_revenue - total_cost,
            "deadweight_loss": 0.5 * (competitive_quantity - monopoly_quantity) * (monopoly_price - mc),
        })
