import unittest
from datetime import datetime

from kitchen.domain.ShoppingList import ShoppingList, validate_shopping_list_data
from kitchen.logic.shopping.list_builder import build_shopping_list, update_shopping_list


class TestUpdateContract(unittest.TestCase):

    def test_flat_list_partial_update(self):
        items = [
            {"ingredient": "milk", "amount": "1 cup", "purchased": False},
            {"ingredient": "eggs", "amount": "2", "purchased": False},
        ]
        updated = update_shopping_list(items, [
            {"ingredientName": "milk", "purchased": True},
            {"ingredientName": "caviar", "purchased": True},
        ])
        self.assertEqual(updated, 1)
        self.assertEqual(items[0], {"ingredient": "milk", "amount": "1 cup", "purchased": True})
        self.assertEqual(items[1], {"ingredient": "eggs", "amount": "2", "purchased": False})

    def test_categorized_storage_shape(self):
        items = {
            "Dairy": [{"ingredient": "milk", "selected": True}],
            "Eggs": [{"ingredient": "eggs", "selected": True}],
        }
        updated = update_shopping_list(items, [{"ingredientName": "eggs", "selected": False, "note": "free range"}])
        self.assertEqual(updated, 1)
        self.assertEqual(items["Eggs"][0], {"ingredient": "eggs", "selected": False, "note": "free range"})
        self.assertEqual(items["Dairy"][0], {"ingredient": "milk", "selected": True})

    def test_update_is_idempotent(self):
        items = [{"ingredient": "milk", "purchased": False}]
        update = [{"ingredientName": "milk", "purchased": True}]
        update_shopping_list(items, update)
        update_shopping_list(items, update)
        self.assertEqual(items, [{"ingredient": "milk", "purchased": True}])

    def test_only_first_matching_item_changes(self):
        items = [{"ingredient": "salt", "purchased": False}, {"ingredient": "salt", "purchased": False}]
        update_shopping_list(items, [{"ingredientName": "salt", "purchased": True}])
        self.assertEqual([i["purchased"] for i in items], [True, False])

    def test_shopping_list_objects(self):
        recipe = {"_id": "r1", "title": "Bread", "ingredients": [{"name": "flour", "amount": "3 cups"},
                                                                 {"name": "yeast", "amount": "1 tsp"}]}
        shopping_list = build_shopping_list([recipe], now=datetime(2024, 1, 1))
        updated = update_shopping_list(shopping_list, [
            {"ingredientName": "flour", "purchased": True, "note": "organic"},
            "not an update",
        ])
        self.assertEqual(updated, 1)
        flour = shopping_list.find("flour")
        self.assertTrue(flour.purchased)
        self.assertEqual(flour.amount, "3 cups")
        self.assertEqual(flour.to_dict()["note"], "organic")
        self.assertFalse(shopping_list.find("yeast").purchased)
        # generated summary is kept until refreshed
        self.assertEqual(shopping_list.summary["purchased"], 0)
        self.assertEqual(shopping_list.refresh_summary()["purchased"], 1)


class TestShoppingListDocument(unittest.TestCase):

    def setUp(self):
        self.shopping_list = ShoppingList.from_dict({
            "items": [
                {"ingredient": "milk", "category": "Dairy", "inInventory": True},
                {"name": "bread", "category": "Breads & Bakery"},
                {"ingredient": "cheddar", "category": "Cheese", "purchased": True},
            ],
            "generatedAt": "2024-03-04T18:30:00",
        })

    def test_flat_items_are_categorized(self):
        self.assertEqual(set(self.shopping_list.items), {"Dairy", "Breads & Bakery", "Cheese"})
        self.assertEqual(self.shopping_list.generated_at, datetime(2024, 3, 4, 18, 30))

    def test_stats_and_filters(self):
        self.assertEqual(self.shopping_list.calculate_stats(),
                         {"totalItems": 3, "needToBuy": 1, "inInventory": 1, "purchased": 1})
        self.assertEqual(list(self.shopping_list.filter_items("needToBuy")), ["Breads & Bakery"])
        self.assertEqual(list(self.shopping_list.filter_items("purchased")), ["Cheese"])
        with self.assertRaises(ValueError):
            self.shopping_list.filter_items("bogus")

    def test_toggle_and_bulk_purchase(self):
        self.assertTrue(self.shopping_list.toggle_purchased("bread-Breads & Bakery"))
        self.assertFalse(self.shopping_list.toggle_purchased("bread-Breads & Bakery"))
        self.assertFalse(self.shopping_list.toggle_purchased("missing-key"))
        self.shopping_list.mark_all_purchased()
        self.assertEqual(self.shopping_list.calculate_stats()["purchased"], 3)
        self.shopping_list.clear_purchased()
        self.assertEqual(self.shopping_list.calculate_stats()["purchased"], 0)

    def test_categorized_documents_load_too(self):
        again = ShoppingList.from_dict(self.shopping_list.to_dict())
        self.assertEqual(again.calculate_stats(), self.shopping_list.calculate_stats())
        self.assertEqual(again.find("bread").category, "Breads & Bakery")

    def test_validate_document(self):
        self.assertFalse(validate_shopping_list_data(None)["isValid"])
        self.assertFalse(validate_shopping_list_data({})["isValid"])
        empty = validate_shopping_list_data({"items": []})
        self.assertTrue(empty["isValid"])
        self.assertEqual(empty["warnings"], ["Shopping list is empty"])
        broken = validate_shopping_list_data({"items": {"Dairy": [{"amount": "1"}]}})
        self.assertFalse(broken["isValid"])
        self.assertEqual(broken["errors"], ["Item at index 0 missing name/ingredient"])
