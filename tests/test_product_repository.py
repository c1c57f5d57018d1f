import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from app.core.constants import Category
from app.core.dates import ensure_utc, utc_now
from app.core.errors import DuplicateSlug, StoreUnavailable, ValidationError
from app.database import DatabaseConnector
from app.schemas.product import ProductQuery, ProductSort
from app.services.product_repository import ProductRepository


def product_fields(slug, **overrides):
    fields = {
        "name": "Product {}".format(slug),
        "slug": slug,
        "description": "Description of {}".format(slug),
        "price": 19.99,
        "category": "Electronics",
        "inventory": 10,
        "image": "/{}.png".format(slug),
    }
    fields.update(overrides)
    return fields


class ProductRepositoryTestCase(unittest.TestCase):
    def setUp(self):
        self.connector = DatabaseConnector("sqlite:///:memory:")
        self.db = self.connector.session()
        self.repo = ProductRepository(self.db)

    def tearDown(self):
        self.db.close()
        self.connector.disconnect()


class CreateProductTest(ProductRepositoryTestCase):
    def test_create_then_read_by_slug_round_trip(self):
        requested_at = utc_now()
        fields = product_fields("desk-lamp", price=79.99, inventory=67, category="Home")
        created = self.repo.create(fields)

        fetched = self.repo.get_by_slug("desk-lamp")
        self.assertIsNotNone(fetched)
        self.assertIsNotNone(fetched.id)
        self.assertEqual(fetched.id, created.id)
        self.assertEqual(fetched.name, fields["name"])
        self.assertEqual(fetched.description, fields["description"])
        self.assertAlmostEqual(fetched.price, 79.99)
        self.assertEqual(fetched.category, Category.HOME)
        self.assertEqual(fetched.inventory, 67)
        self.assertEqual(fetched.image, fields["image"])
        self.assertGreaterEqual(ensure_utc(fetched.last_updated), requested_at)

    def test_defaults(self):
        fields = product_fields("defaults")
        del fields["inventory"]
        product = self.repo.create(fields)
        self.assertEqual(product.inventory, 0)
        self.assertAlmostEqual(product.rating, 4.5)
        self.assertEqual(product.reviews, 0)

    def test_slug_is_lowercased_and_name_trimmed(self):
        product = self.repo.create(product_fields("Mixed-Case-Slug", name="  Lamp  "))
        self.assertEqual(product.slug, "mixed-case-slug")
        self.assertEqual(product.name, "Lamp")
        self.assertIsNotNone(self.repo.get_by_slug("MIXED-case-slug"))

    def test_duplicate_slug_is_rejected(self):
        first = self.repo.create(product_fields("x", name="Original"))
        with self.assertRaises(DuplicateSlug):
            self.repo.create(product_fields("x", name="Impostor"))
        with self.assertRaises(DuplicateSlug):
            self.repo.create(product_fields("X", name="Impostor"))

        products = self.repo.all_products()
        self.assertEqual(len(products), 1)
        self.assertEqual(products[0].id, first.id)
        self.assertEqual(products[0].name, "Original")

    def test_missing_required_fields(self):
        fields = product_fields("missing")
        del fields["name"]
        fields["image"] = ""
        with self.assertRaises(ValidationError) as ctx:
            self.repo.create(fields)
        self.assertEqual(ctx.exception.message, "Missing required fields: name, image")

    def test_reserved_slug_is_rejected(self):
        with self.assertRaises(ValidationError):
            self.repo.create(product_fields(" Slugs "))
        product = self.repo.create(product_fields("lamp"))
        with self.assertRaises(ValidationError):
            self.repo.update(product.id, {"slug": "slugs"})
        self.assertEqual(self.repo.get_by_id(product.id).slug, "lamp")

    def test_price_zero_is_not_missing(self):
        product = self.repo.create(product_fields("free", price=0))
        self.assertEqual(product.price, 0)

    def test_out_of_range_values_are_rejected(self):
        cases = [
            {"price": -1},
            {"inventory": -3},
            {"rating": 5.5},
            {"category": "Toys"},
        ]
        for overrides in cases:
            with self.subTest(overrides=overrides):
                with self.assertRaises(ValidationError):
                    self.repo.create(product_fields("bad", **overrides))
        self.assertEqual(self.repo.all_products(), [])


class QueryProductsTest(ProductRepositoryTestCase):
    def setUp(self):
        super().setUp()
        self.repo.create(product_fields("headphones", category="Electronics", rating=4.8, name="Wireless Headphones"))
        self.repo.create(product_fields("tshirt", category="Fashion", rating=4.6, description="Organic cotton"))
        self.repo.create(product_fields("hub", category="Electronics", rating=4.7))
        self.repo.create(product_fields("lamp", category="Home", rating=4.5))

    def test_list_in_insertion_order(self):
        products = self.repo.list_products()
        self.assertEqual([p.slug for p in products], ["headphones", "tshirt", "hub", "lamp"])

    def test_filter_by_category_and_limit(self):
        products = self.repo.list_products(ProductQuery(category=Category.ELECTRONICS))
        self.assertEqual([p.slug for p in products], ["headphones", "hub"])

        products = self.repo.list_products(ProductQuery(limit=2))
        self.assertEqual([p.slug for p in products], ["headphones", "tshirt"])

    def test_search_matches_name_or_description(self):
        products = self.repo.list_products(ProductQuery(search="WIRELESS"))
        self.assertEqual([p.slug for p in products], ["headphones"])

        products = self.repo.list_products(ProductQuery(search="cotton"))
        self.assertEqual([p.slug for p in products], ["tshirt"])

    def test_sort_by_rating(self):
        products = self.repo.list_products(ProductQuery(sort=ProductSort.RATING, limit=3))
        self.assertEqual([p.slug for p in products], ["headphones", "hub", "tshirt"])

    def test_get_by_slug_is_exact(self):
        self.assertIsNone(self.repo.get_by_slug("head"))
        self.assertIsNone(self.repo.get_by_slug(""))

    def test_get_by_id(self):
        lamp = self.repo.get_by_slug("lamp")
        self.assertEqual(self.repo.get_by_id(lamp.id).slug, "lamp")
        self.assertIsNone(self.repo.get_by_id(9999))

    def test_related_products(self):
        headphones = self.repo.get_by_slug("headphones")
        related = self.repo.related_products(headphones)
        self.assertEqual([p.slug for p in related], ["hub"])

    def test_list_slugs(self):
        self.assertEqual(self.repo.list_slugs(), ["headphones", "tshirt", "hub", "lamp"])


class UpdateProductTest(ProductRepositoryTestCase):
    def test_update_stamps_last_updated(self):
        product = self.repo.create(product_fields("stamp", inventory=20))
        before = ensure_utc(product.last_updated)

        updated = self.repo.update(product.id, {"inventory": 5})

        reread = self.repo.get_by_id(product.id)
        self.assertEqual(updated.inventory, 5)
        self.assertEqual(reread.inventory, 5)
        self.assertGreater(ensure_utc(reread.last_updated), before)

    def test_empty_update_still_refreshes_timestamp(self):
        product = self.repo.create(product_fields("noop"))
        before = ensure_utc(product.last_updated)
        updated = self.repo.update(product.id, {})
        self.assertGreater(ensure_utc(updated.last_updated), before)

    def test_update_ignores_unknown_and_protected_fields(self):
        product = self.repo.create(product_fields("protected"))
        updated = self.repo.update(product.id, {"id": 999, "unknown": "x", "name": "Renamed"})
        self.assertEqual(updated.id, product.id)
        self.assertEqual(updated.name, "Renamed")

    def test_update_validates_ranges(self):
        product = self.repo.create(product_fields("ranges"))
        with self.assertRaises(ValidationError):
            self.repo.update(product.id, {"price": -5})
        with self.assertRaises(ValidationError):
            self.repo.update(product.id, {"category": "Garden"})

    def test_update_missing_product(self):
        self.assertIsNone(self.repo.update(12345, {"inventory": 1}))

    def test_slug_change_is_not_rechecked_but_storage_rejects_collision(self):
        # The update path never looks for an existing slug itself; only the
        # unique index on products.slug stops the collision.
        self.repo.create(product_fields("first"))
        second = self.repo.create(product_fields("second"))

        with self.assertRaises(DuplicateSlug):
            self.repo.update(second.id, {"slug": "FIRST"})

        self.assertEqual(self.repo.get_by_id(second.id).slug, "second")

    def test_slug_change_to_free_slug(self):
        product = self.repo.create(product_fields("old-slug"))
        self.repo.update(product.id, {"slug": "New-Slug"})
        self.assertIsNone(self.repo.get_by_slug("old-slug"))
        self.assertEqual(self.repo.get_by_slug("new-slug").id, product.id)


class DeleteProductTest(ProductRepositoryTestCase):
    def test_delete(self):
        product = self.repo.create(product_fields("gone"))
        self.assertTrue(self.repo.delete(product.id))
        self.assertIsNone(self.repo.get_by_slug("gone"))

    def test_delete_missing_product_returns_false(self):
        self.assertFalse(self.repo.delete(424242))


class StoreFailureTest(unittest.TestCase):
    def test_query_failure_becomes_store_unavailable(self):
        db = MagicMock()
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))
        repo = ProductRepository(db)

        with self.assertRaises(StoreUnavailable):
            repo.list_products()
        db.rollback.assert_called()


if __name__ == "__main__":
    unittest.main()
