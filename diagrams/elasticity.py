from __future__ import annotations

from core.economics import AffineCurve, ieee_divide
from diagrams.base import DiagramModel, DiagramResult, DiagramType
from formatting.renderers import RenderContext, format_value, round_label
from schemas.parameters import ElasticityParameters

# The simulated price shock: +10%
PRICE_SHOCK = 1.1


def point_elasticity_curve(price: float, quantity: float, coefficient: float) -> AffineCurve:
    """
    Linear demand through (quantity, price) with the given point elasticity.

    slope = coefficient * price / quantity; a zero quantity gives an
    infinite slope and a NaN intercept rather than an error.
    """
    slope = coefficient * ieee_divide(price, quantity)
    return AffineCurve(price - slope * quantity, slope)


class ElasticityDiagram(DiagramModel):
    diagram_type = DiagramType.ELASTICITY
    title = "Price Elasticity of Demand"
    explanation = (
        "Both demand lines pass through the same reference point but respond "
        "differently to a 10% price increase. The elastic line (|e| > 1) loses "
        "proportionally more quantity than the price rose; the inelastic line "
        "(|e| < 1) loses less."
    )
    parameters_model = ElasticityParameters

    def draw(self, ctx: RenderContext, params: ElasticityParameters) -> DiagramResult:
        params = self.coerce(params)
        colors = ctx.style.colors
        ann = ctx.annotations
        ctx.begin(self.x_label, self.y_label)

        elastic = point_elasticity_curve(params.price, params.quantity, params.elastic_coefficient)
        inelastic = point_elasticity_curve(params.price, params.quantity, params.inelastic_coefficient)

        ctx.curves.draw_curve(elastic, colors.elastic_demand)
        ctx.curves.draw_curve(inelastic, colors.inelastic_demand)

        ann.draw_point(params.quantity, params.price, colors.equilibrium)
        ann.label_at(
            params.quantity, params.price,
            f"Reference Point (Q={format_value(params.quantity)}, P={format_value(params.price)})",
            colors.equilibrium,
        )

        new_price = params.price * PRICE_SHOCK
        elastic_quantity = ieee_divide(new_price - elastic.intercept, elastic.slope)
        inelastic_quantity = ieee_divide(new_price - inelastic.intercept, inelastic.slope)
        elastic_change = ieee_divide(elastic_quantity - params.quantity, params.quantity) * 100
        inelastic_change = ieee_divide(inelastic_quantity - params.quantity, params.quantity) * 100

        ann.draw_dashed_hline(new_price, colors.equilibrium)
        self.label_price_line(ctx, new_price, f"New Price: {round_label(new_price)} (+10%)",
                              colors.equilibrium)

        ann.draw_dashed_vline(elastic_quantity, colors.elastic_demand)
        ann.draw_dashed_vline(inelastic_quantity, colors.inelastic_demand)

        ann.label_at(
            elastic_quantity, new_price - 20,
            f"Elastic: Q={round_label(elastic_quantity)} ({round_label(elastic_change)}%)",
            colors.elastic_demand,
        )
        ann.label_at(
            inelastic_quantity, new_price + 20,
            f"Inelastic: Q={round_label(inelastic_quantity)} ({round_label(inelastic_change)}%)",
            colors.inelastic_demand,
        )

        return DiagramResult.build(self.diagram_type, params, {
            "reference_point": {"price": params.price, "quantity": params.quantity},
            "new_price": new_price,
            "elastic": {
                "coefficient": params.elastic_coefficient,
                "new_quantity": elastic_quantity,
                "percent_change": elastic_change,
            },
            "inelastic": {
                "coefficient": params.inelastic_coefficient,
                "new_quantity": inelastic_quantity,
                "percent_change": inelastic_change,
            },
        })
