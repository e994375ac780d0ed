"""
Apparel production mix.

Two garments compete for sewing hours and fabric:

    product   profit  hours/unit  fabric/unit  storage
    T-shirt   45      0.7         1.5          50
    Sweater   60      1.2         2.0          50

with 90 production hours and 200 units of fabric available. The optimum
makes 50 T-shirts and 45.83 sweaters for a profit of 5000; hours and the
T-shirt storage cap are binding, fabric is not.
"""

from opsplan.core.product import Product, ProductMixProblem, ResourceConstraints

AVAILABLE_HOURS = 90
AVAILABLE_MATERIAL = 200


def apparel_product_mix() -> ProductMixProblem:
    """Build the default T-shirt / sweater production mix."""
    return ProductMixProblem(
        product_x=Product(
            name="T-shirt",
            unit_profit=45,
            time_per_unit=0.7,
            material_per_unit=1.5,
            max_inventory=50,
        ),
        product_y=Product(
            name="Sweater",
            unit_profit=60,
            time_per_unit=1.2,
            material_per_unit=2.0,
            max_inventory=50,
        ),
        constraints=ResourceConstraints(
            available_hours=AVAILABLE_HOURS,
            available_material=AVAILABLE_MATERIAL,
        ),
    )
