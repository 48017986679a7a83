"""Tests for the checklist item controller."""

import unittest

from checknote.services.checklist import Item, ItemList, sort_by_checked


def names(items):
    return [item.name for item in items]


class ItemListTest(unittest.TestCase):
    """Tests for ItemList mutations."""

    def setUp(self):
        self.items = ItemList.from_body("a\to\nb\tx\nc\to\nd\tx")

    def assertPartitioned(self, items):
        states = [item.checked for item in items]
        self.assertEqual(states, sorted(states), f"unchecked must precede checked: {states}")

    def test_initial_sort_is_stable(self):
        self.assertEqual(names(self.items), ["a", "c", "b", "d"])
        self.assertPartitioned(self.items)

    def test_add_item_before_checked(self):
        items = ItemList([Item("b", checked=True)])
        new = items.add_item()
        self.assertEqual(items.items, [Item("", False), Item("b", True)])
        self.assertEqual(items[0].id, new.id)

    def test_add_item_goes_first(self):
        self.items.add_item()
        self.assertEqual(names(self.items), ["", "a", "c", "b", "d"])
        self.assertPartitioned(self.items)

    def test_toggle_check(self):
        target = self.items[0]
        self.assertTrue(self.items.toggle_check(target.id))
        self.assertEqual(names(self.items), ["c", "a", "b", "d"])
        self.assertTrue(self.items.find(target.id).checked)
        self.assertPartitioned(self.items)

    def test_uncheck_moves_to_end_of_unchecked(self):
        target = self.items[3]
        self.items.toggle_check(target.id)
        self.assertEqual(names(self.items), ["a", "c", "d", "b"])

    def test_toggle_targets_one_duplicate(self):
        """Identity is the item id, never the name."""
        items = ItemList.from_body("a\to\na\to")
        second = items[1]
        items.toggle_check(second.id)
        self.assertEqual([i.checked for i in items], [False, True])
        self.assertEqual(items[1].id, second.id)

    def test_edit_item(self):
        target = self.items[1]
        self.assertTrue(self.items.edit_item(target.id, "cherries"))
        self.assertEqual(self.items.find(target.id).name, "cherries")

    def test_edit_checked_item_is_noop(self):
        target = self.items[2]
        self.assertFalse(self.items.edit_item(target.id, "nope"))
        self.assertEqual(self.items.find(target.id).name, "b")

    def test_delete_item(self):
        target = self.items[1]
        self.assertTrue(self.items.delete_item(target.id))
        self.assertEqual(names(self.items), ["a", "b", "d"])

    def test_delete_one_of_duplicates(self):
        items = ItemList.from_body("a\to\na\to\nb\to")
        items.delete_item(items[0].id)
        self.assertEqual(names(items), ["a", "b"])

    def test_unknown_id_is_noop(self):
        before = self.items.items
        self.assertFalse(self.items.toggle_check(-1))
        self.assertFalse(self.items.edit_item(-1, "x"))
        self.assertFalse(self.items.delete_item(-1))
        self.assertFalse(self.items.move(-1, 0))
        self.assertEqual(self.items.items, before)
        self.assertEqual(self.items.index_of(-1), -1)
        self.assertIsNone(self.items.find(-1))

    def test_mutations_do_not_touch_previous_snapshot(self):
        snapshot = self.items.items
        self.items.toggle_check(snapshot[0].id)
        self.assertFalse(snapshot[0].checked)

    def test_returned_items_are_detached(self):
        self.items.items[0].checked = True
        self.items[0].name = "changed"
        for item in self.items:
            item.checked = True
        self.items.find(self.items[1].id).checked = True
        self.items.add_item().name = "typed"
        self.items.search("a")[0].name = "renamed"
        self.assertEqual(names(self.items), ["", "a", "c", "b", "d"])
        self.assertEqual([i.checked for i in self.items], [False, False, False, True, True])
        self.assertEqual(self.items.body, "\to\na\to\nc\to\nb\tx\nd\tx")

    def test_checked_item_stays_read_only_through_views(self):
        target = self.items[2]
        target.checked = False
        self.assertFalse(self.items.edit_item(target.id, "nope"))
        self.assertEqual(self.items.find(target.id).name, "b")

    def test_constructor_copies_items(self):
        source = [Item("a"), Item("b", checked=True)]
        items = ItemList(source)
        source[0].checked = True
        self.assertEqual([i.checked for i in items], [False, True])

    def test_reorder(self):
        a, c, b, d = self.items.items
        self.items.reorder([c.id, a.id, d.id, b.id])
        self.assertEqual(names(self.items), ["c", "a", "d", "b"])

    def test_reorder_keeps_partition(self):
        a, c, b, d = self.items.items
        self.items.reorder([b.id, a.id, d.id, c.id])
        self.assertEqual(names(self.items), ["a", "c", "b", "d"])
        self.assertPartitioned(self.items)

    def test_reorder_partial(self):
        a, c, b, d = self.items.items
        self.items.reorder([c.id, 999])
        self.assertEqual(names(self.items), ["c", "a", "b", "d"])

    def test_move(self):
        a = self.items[0]
        self.assertTrue(self.items.move(a.id, 1))
        self.assertEqual(names(self.items), ["c", "a", "b", "d"])

    def test_move_past_checked_is_resorted(self):
        a = self.items[0]
        self.items.move(a.id, 99)
        self.assertEqual(names(self.items), ["c", "a", "b", "d"])

    def test_body_and_duplicates(self):
        items = ItemList.from_body("x\to\nx\tx")
        self.assertEqual(items.body, "x\to\nx\tx")
        self.assertEqual(items.duplicates, ["x"])

    def test_load_replaces_items(self):
        self.items.load("z\tx\ny\to")
        self.assertEqual(names(self.items), ["y", "z"])

    def test_search_index_follows_changes(self):
        self.assertEqual(names(self.items.search("a")), ["a"])
        self.items.edit_item(self.items[0].id, "apple")
        self.assertEqual(names(self.items.search("apple")), ["apple"])
        self.assertEqual(names(self.items.visible("")), ["apple", "c", "b", "d"])


class SortByCheckedTest(unittest.TestCase):
    def test_stable_partition(self):
        items = [Item("1", True), Item("2"), Item("3", True), Item("4")]
        self.assertEqual(names(sort_by_checked(items)), ["2", "4", "1", "3"])


if __name__ == "__main__":
    unittest.main()
