"""Unit tests for SaleDraft stock reconciliation."""

import pytest

from tests.fakes import FakeProductRepository, make_product
from vendas.domain.exceptions import RuleViolationError, SaleRejectedError
from vendas.domain.model.sale import StockDecrement
from vendas.domain.model.value_objects import Money
from vendas.domain.service.sale_draft import DraftState, SaleDraft

VALID_CUSTOMER = dict(date="15/03/2024", tax_id="529.982.247-25", phone="(11) 98765-4321")


def _draft(*products) -> tuple[SaleDraft, FakeProductRepository]:
    if not products:
        products = (
            make_product("p1", "Widget", "10.00", 5),
            make_product("p2", "Gadget", "2.50", 2),
            make_product("p3", "Sold Out", "99.00", 0),
        )
    catalog = FakeProductRepository(list(products))
    return SaleDraft(catalog), catalog


def _ready_draft() -> tuple[SaleDraft, FakeProductRepository]:
    draft, catalog = _draft()
    draft.set_customer(**VALID_CUSTOMER)
    return draft, catalog


class TestAddProduct:

    def test_first_add_creates_line_at_quantity_one(self):
        draft, _ = _draft()
        draft.add_product("p1")
        [line] = draft.items
        assert line.product_id == "p1"
        assert line.product_name == "Widget"
        assert line.quantity.value == 1
        assert line.unit_price == Money.of("10.00")
        assert line.total_price == Money.of("10.00")

    def test_adding_twice_increments_single_line(self):
        draft, _ = _draft()
        draft.add_product("p1")
        draft.add_product("p1")
        assert len(draft.items) == 1
        assert draft.quantity_of("p1") == 2

    def test_add_clamps_at_stock(self):
        draft, _ = _draft()
        for _ in range(4):
            draft.add_product("p2")  # stock 2
        assert draft.quantity_of("p2") == 2

    def test_out_of_stock_product_is_ignored(self):
        draft, _ = _draft()
        draft.add_product("p3")
        assert draft.items == []
        assert draft.state is DraftState.EMPTY

    def test_unknown_product_is_ignored(self):
        draft, _ = _draft()
        draft.add_product("nope")
        assert draft.items == []

    def test_lines_keep_insertion_order(self):
        draft, _ = _draft()
        draft.add_product("p2")
        draft.add_product("p1")
        assert [i.product_id for i in draft.items] == ["p2", "p1"]

    def test_price_snapshot_survives_catalog_price_change(self):
        draft, catalog = _draft()
        draft.add_product("p1")
        catalog.get_by_id("p1").price = Money.of("50.00")
        draft.add_product("p1")
        assert draft.items[0].unit_price == Money.of("10.00")
        assert draft.total == Money.of("20.00")


class TestAvailableProducts:

    def test_excludes_zero_stock(self):
        draft, _ = _draft()
        assert [p.id for p in draft.available_products()] == ["p1", "p2"]

    def test_selling_last_unit_removes_product_from_available(self):
        draft, catalog = _draft()
        catalog.set_quantity("p2", 0)
        assert "p2" not in [p.id for p in draft.available_products()]


class TestChangeQuantity:

    def test_increase(self):
        draft, _ = _draft()
        draft.add_product("p1")
        draft.change_quantity("p1", 2)
        assert draft.quantity_of("p1") == 3

    def test_clamped_to_stock(self):
        draft, _ = _draft()
        draft.add_product("p1")
        draft.change_quantity("p1", 100)
        assert draft.quantity_of("p1") == 5

    def test_reaching_zero_removes_line(self):
        draft, _ = _draft()
        draft.add_product("p1")
        draft.change_quantity("p1", -1)
        assert draft.items == []

    def test_large_negative_delta_removes_line(self):
        draft, _ = _draft()
        draft.add_product("p1")
        draft.change_quantity("p1", -50)
        assert draft.items == []

    def test_product_not_in_draft_is_ignored(self):
        draft, _ = _draft()
        draft.change_quantity("p1", 3)
        assert draft.items == []

    def test_line_for_product_now_out_of_stock_can_only_go_away(self):
        draft, catalog = _draft()
        draft.add_product("p1")
        catalog.set_quantity("p1", 0)
        draft.change_quantity("p1", 1)
        assert draft.items == []

    @pytest.mark.parametrize(
        "deltas",
        [
            [1, 1, 1, 1, 1, 1],
            [3, -1, 5, -2, -10],
            [-1],
            [4, -2, 2, 2, -1, 1],
            [10, -3, -3, 10],
        ],
    )
    def test_quantity_always_within_zero_and_stock(self, deltas):
        draft, _ = _draft()
        draft.add_product("p1")
        for delta in deltas:
            draft.change_quantity("p1", delta)
            qty = draft.quantity_of("p1")
            assert 0 <= qty <= 5
            if qty == 0:
                assert all(i.product_id != "p1" for i in draft.items)
                break


class TestRemoveAndTotal:

    def test_remove_item(self):
        draft, _ = _draft()
        draft.add_product("p1")
        draft.add_product("p2")
        draft.remove_item("p1")
        assert [i.product_id for i in draft.items] == ["p2"]

    def test_remove_missing_item_is_harmless(self):
        draft, _ = _draft()
        draft.remove_item("p1")
        assert draft.items == []

    def test_total_tracks_every_change(self):
        draft, _ = _draft()
        assert draft.total == Money.of("0")
        draft.add_product("p1")
        draft.add_product("p2")
        draft.change_quantity("p1", 2)
        assert draft.total == Money.of("32.50")
        draft.remove_item("p2")
        assert draft.total == Money.of("30.00")


class TestValidate:

    def test_valid_draft(self):
        draft, _ = _ready_draft()
        draft.add_product("p1")
        assert draft.validate() == []
        assert draft.state is DraftState.VALIDATED

    def test_invalid_date(self):
        draft, _ = _ready_draft()
        draft.add_product("p1")
        draft.set_customer(date="31/02/2024")
        assert draft.validate() == ["Invalid date. Use the DD/MM/AAAA format"]

    def test_invalid_cpf(self):
        draft, _ = _ready_draft()
        draft.add_product("p1")
        draft.set_customer(tax_id="529.982.247-24")
        assert draft.validate() == ["Invalid CPF"]

    def test_invalid_phone(self):
        draft, _ = _ready_draft()
        draft.add_product("p1")
        draft.set_customer(phone="9876-5432")
        assert draft.validate() == ["Invalid phone number"]

    def test_empty_draft(self):
        draft, _ = _ready_draft()
        assert draft.validate() == ["Add at least one product to the sale"]

    def test_stock_is_rechecked_against_current_catalog(self):
        draft, catalog = _ready_draft()
        draft.add_product("p1")
        draft.change_quantity("p1", 2)  # 3 units
        catalog.set_quantity("p1", 2)
        assert draft.validate() == ["Insufficient stock for Widget"]

    def test_deleted_product_counts_as_insufficient_stock(self):
        draft, catalog = _ready_draft()
        draft.add_product("p2")
        catalog.delete("p2")
        assert draft.validate() == ["Insufficient stock for Gadget"]

    def test_all_problems_reported_together(self):
        draft, catalog = _draft()
        draft.set_customer(date="99/99/9999", tax_id="111.111.111-11", phone="123")
        draft.add_product("p1")
        draft.add_product("p2")
        catalog.set_quantity("p1", 0)
        catalog.set_quantity("p2", 0)
        assert draft.validate() == [
            "Invalid date. Use the DD/MM/AAAA format",
            "Invalid CPF",
            "Invalid phone number",
            "Insufficient stock for Widget",
            "Insufficient stock for Gadget",
        ]
        assert draft.state is DraftState.BUILDING

    def test_empty_and_invalid_customer_together(self):
        draft, _ = _draft()
        assert draft.validate() == [
            "Invalid date. Use the DD/MM/AAAA format",
            "Invalid CPF",
            "Invalid phone number",
            "Add at least one product to the sale",
        ]


class TestStateMachine:

    def test_progression(self):
        draft, _ = _ready_draft()
        assert draft.state is DraftState.EMPTY
        draft.add_product("p1")
        assert draft.state is DraftState.BUILDING
        draft.validate()
        assert draft.state is DraftState.VALIDATED
        draft.commit()
        assert draft.state is DraftState.COMMITTED

    def test_editing_after_validation_drops_back_to_building(self):
        draft, _ = _ready_draft()
        draft.add_product("p1")
        draft.validate()
        draft.add_product("p1")
        assert draft.state is DraftState.BUILDING

    def test_removing_last_line_after_validation_returns_to_empty(self):
        draft, _ = _ready_draft()
        draft.add_product("p1")
        draft.validate()
        draft.remove_item("p1")
        assert draft.state is DraftState.EMPTY

    def test_committed_draft_cannot_be_edited(self):
        draft, _ = _ready_draft()
        draft.add_product("p1")
        draft.commit()
        with pytest.raises(RuleViolationError, match="already been recorded"):
            draft.add_product("p1")
        with pytest.raises(RuleViolationError):
            draft.set_customer(phone="(11) 91234-5678")

    def test_committed_draft_cannot_be_committed_again(self):
        draft, _ = _ready_draft()
        draft.add_product("p1")
        draft.commit()
        with pytest.raises(SaleRejectedError, match="already been recorded"):
            draft.commit()


class TestCommit:

    def test_end_to_end_scenario(self):
        draft, catalog = _draft(make_product("p1", "Widget", "10.00", 5))
        draft.set_customer(**VALID_CUSTOMER)

        draft.add_product("p1")
        [line] = draft.items
        assert line.quantity.value == 1
        assert line.total_price == Money.of("10.00")

        draft.add_product("p1")
        draft.add_product("p1")
        [line] = draft.items
        assert line.quantity.value == 3
        assert line.total_price == Money.of("30.00")

        result = draft.commit()

        assert result.sale.total_amount == Money.of("30.00")
        assert result.decrements == (StockDecrement(product_id="p1", new_quantity=2),)
        # The engine only proposes the change; the catalog is untouched.
        assert catalog.get_by_id("p1").quantity == 5

    def test_sale_freezes_customer_and_items(self):
        draft, _ = _ready_draft()
        draft.add_product("p1")
        draft.add_product("p2")
        sale = draft.commit().sale
        assert sale.id
        assert sale.date == "15/03/2024"
        assert sale.customer.tax_id == "529.982.247-25"
        assert sale.customer.phone == "(11) 98765-4321"
        assert [i.product_id for i in sale.items] == ["p1", "p2"]
        assert sale.created_at.tzinfo is not None

    def test_one_decrement_per_line(self):
        draft, _ = _ready_draft()
        draft.add_product("p1")
        draft.add_product("p2")
        draft.add_product("p2")
        decrements = draft.commit().decrements
        assert decrements == (
            StockDecrement("p1", 4),
            StockDecrement("p2", 0),
        )

    def test_decrement_uses_current_stock(self):
        draft, catalog = _ready_draft()
        draft.add_product("p1")
        catalog.set_quantity("p1", 3)
        assert draft.commit().decrements == (StockDecrement("p1", 2),)

    def test_rejected_commit_carries_every_message(self):
        draft, _ = _draft()
        draft.set_customer(date="15/03/2024", tax_id="123", phone="123")
        with pytest.raises(SaleRejectedError) as exc_info:
            draft.commit()
        assert exc_info.value.messages == [
            "Invalid CPF",
            "Invalid phone number",
            "Add at least one product to the sale",
        ]

    def test_rejected_commit_leaves_draft_editable(self):
        draft, catalog = _ready_draft()
        draft.add_product("p1")
        draft.change_quantity("p1", 4)
        catalog.set_quantity("p1", 1)
        with pytest.raises(SaleRejectedError, match="Insufficient stock for Widget"):
            draft.commit()
        assert draft.state is DraftState.BUILDING

        draft.change_quantity("p1", -4)
        assert draft.quantity_of("p1") == 1
        assert draft.commit().decrements == (StockDecrement("p1", 0),)
