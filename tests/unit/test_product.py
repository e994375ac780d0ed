"""
Tests for the product-mix data model.
"""

import pytest

from opsplan.core.product import (
    Product,
    ProductMixProblem,
    ProductSlot,
    ResourceConstraints,
    Vertex,
)


class TestProduct:
    """Tests for Product and ResourceConstraints validation."""

    def test_valid_product(self):
        product = Product("T-shirt", 45, 0.7, 1.5, 50)
        assert product.unit_profit == 45

    @pytest.mark.parametrize("field_name", [
        "unit_profit", "time_per_unit", "material_per_unit", "max_inventory",
    ])
    def test_negative_field(self, field_name):
        values = dict(name="Bad", unit_profit=1, time_per_unit=1,
                      material_per_unit=1, max_inventory=1)
        values[field_name] = -1
        with pytest.raises(ValueError, match=field_name):
            Product(**values)

    def test_negative_constraints(self):
        with pytest.raises(ValueError):
            ResourceConstraints(available_hours=-1, available_material=10)
        with pytest.raises(ValueError):
            ResourceConstraints(available_hours=10, available_material=-1)

    def test_zero_allowed(self):
        constraints = ResourceConstraints(0, 0)
        assert constraints.available_hours == 0


class TestProductSlot:
    """Tests for ProductSlot parsing."""

    def test_parse(self):
        assert ProductSlot.parse("x") is ProductSlot.X
        assert ProductSlot.parse("Y") is ProductSlot.Y
        assert ProductSlot.parse(ProductSlot.X) is ProductSlot.X

    def test_unknown(self):
        with pytest.raises(ValueError):
            ProductSlot.parse("z")


class TestProductMixProblem:
    """Tests for editing and evaluating the problem."""

    def test_set_product(self, apparel_problem):
        updated = apparel_problem.set_product("x", unit_profit=50, max_inventory=40)
        assert apparel_problem.product_x is updated
        assert updated.unit_profit == 50
        assert updated.max_inventory == 40
        assert updated.time_per_unit == 0.7

    def test_set_product_unknown_field(self, apparel_problem):
        before = apparel_problem.product_y
        with pytest.raises(ValueError, match="colour"):
            apparel_problem.set_product("y", colour="red")
        assert apparel_problem.product_y is before

    def test_set_product_invalid_value_leaves_state(self, apparel_problem):
        with pytest.raises(ValueError):
            apparel_problem.set_product("y", unit_profit=-5)
        assert apparel_problem.product_y.unit_profit == 60

    def test_set_constraints_partial(self, apparel_problem):
        apparel_problem.set_constraints(hours=120)
        assert apparel_problem.constraints.available_hours == 120
        assert apparel_problem.constraints.available_material == 200

    def test_set_constraints_negative(self, apparel_problem):
        with pytest.raises(ValueError):
            apparel_problem.set_constraints(material=-10)
        assert apparel_problem.constraints.available_material == 200

    def test_reset(self, apparel_problem):
        apparel_problem.set_product("x", unit_profit=1)
        apparel_problem.set_constraints(hours=1, material=1)
        apparel_problem.reset()
        assert apparel_problem.product_x.unit_profit == 45
        assert apparel_problem.constraints.available_hours == 90

    def test_evaluation(self, apparel_problem):
        assert apparel_problem.objective(10, 10) == 1050
        assert apparel_problem.time_used(10, 10) == pytest.approx(19)
        assert apparel_problem.material_used(10, 10) == pytest.approx(35)

    def test_is_feasible(self, apparel_problem):
        assert apparel_problem.is_feasible(0, 0)
        assert apparel_problem.is_feasible(50, 45)
        assert not apparel_problem.is_feasible(51, 0)
        assert not apparel_problem.is_feasible(-1, 0)
        assert not apparel_problem.is_feasible(50, 50)

    def test_copy_is_independent(self, apparel_problem):
        clone = apparel_problem.copy()
        clone.set_product("x", unit_profit=1)
        assert apparel_problem.product_x.unit_profit == 45


class TestVertex:
    """Tests for Vertex."""

    def test_unpack(self):
        x, y = Vertex(1.5, 2.0)
        assert (x, y) == (1.5, 2.0)

    def test_hashable(self):
        assert len({Vertex(0.0, 0.0), Vertex(0.0, 0.0)}) == 1


class TestNumberAlias:
    """The numeric alias is shared by the activity and product models."""

    def test_single_definition(self):
        from opsplan.core import activity, product
        assert product.Number is activity.Number
