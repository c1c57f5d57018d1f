import unittest

from app.database import DatabaseConnector
from app.services.dashboard_service import catalog_stats, dashboard_summary
from app.services.product_repository import ProductRepository
from app.services.recommendation_service import recommendations
from app.services.revalidation_service import PageRevalidator, product_path
from app.services.seed_service import SAMPLE_PRODUCTS, seed_catalog


def slugs(products):
    return [product.slug for product in products]


class SeededCatalogTestCase(unittest.TestCase):
    def setUp(self):
        self.connector = DatabaseConnector("sqlite:///:memory:")
        self.db = self.connector.session()
        seed_catalog(self.db)
        self.repo = ProductRepository(self.db)
        self.products = self.repo.all_products()

    def tearDown(self):
        self.db.close()
        self.connector.disconnect()


class SeedCatalogTest(SeededCatalogTestCase):
    def test_seed_loads_sample_products(self):
        self.assertEqual(len(self.products), len(SAMPLE_PRODUCTS))

    def test_seed_skips_existing_slugs(self):
        created = seed_catalog(self.db)
        self.assertEqual(created, [])
        self.assertEqual(len(self.repo.all_products()), len(SAMPLE_PRODUCTS))

    def test_seed_reset(self):
        self.repo.update(self.products[0].id, {"inventory": 1})
        created = seed_catalog(self.db, reset=True)
        self.assertEqual(len(created), len(SAMPLE_PRODUCTS))
        self.assertEqual(self.repo.get_by_slug("premium-wireless-headphones").inventory, 45)


class DashboardSummaryTest(SeededCatalogTestCase):
    def test_catalog_stats(self):
        stats = catalog_stats(self.products)
        self.assertEqual(stats.total_products, 6)
        self.assertEqual(stats.low_stock_products, 0)
        self.assertEqual(stats.out_of_stock_products, 0)
        self.assertEqual(stats.total_inventory, 503)
        self.assertAlmostEqual(stats.average_price, 729.94 / 6)

    def test_empty_catalog_stats(self):
        stats = catalog_stats([])
        self.assertEqual(stats.total_products, 0)
        self.assertEqual(stats.total_inventory, 0)
        self.assertEqual(stats.average_price, 0)

    def test_dashboard_summary(self):
        lamp = self.repo.get_by_slug("minimalist-desk-lamp")
        hub = self.repo.get_by_slug("smart-home-hub")
        self.repo.update(lamp.id, {"inventory": 0})
        self.repo.update(hub.id, {"inventory": 3})

        summary = dashboard_summary(self.repo.all_products())

        self.assertEqual(summary.total_products, 6)
        self.assertEqual(summary.low_stock_products, 1)
        self.assertEqual(summary.out_of_stock_products, 1)
        self.assertEqual(summary.total_inventory, 407)
        self.assertAlmostEqual(summary.average_inventory, 407 / 6)
        self.assertAlmostEqual(summary.out_of_stock_rate, 100 / 6)
        self.assertEqual(
            slugs(summary.top_products),
            [
                "the-art-of-code",
                "organic-cotton-tshirt",
                "professional-yoga-mat",
                "premium-wireless-headphones",
                "smart-home-hub",
            ],
        )
        self.assertEqual(slugs(summary.critical_products), ["smart-home-hub"])
        self.assertEqual(slugs(summary.out_of_stock), ["minimalist-desk-lamp"])
        self.assertEqual(len(summary.products), 6)

    def test_dashboard_serializes_camel_case(self):
        data = dashboard_summary(self.products).model_dump(mode="json", by_alias=True)
        self.assertIn("totalProducts", data)
        self.assertIn("totalInventoryValue", data)
        self.assertIn("averageInventory", data)
        self.assertIn("outOfStockRate", data)
        self.assertIn("lastUpdated", data["topProducts"][0])

    def test_empty_dashboard_ratios_are_zero(self):
        summary = dashboard_summary([])
        self.assertEqual(summary.average_inventory, 0.0)
        self.assertEqual(summary.out_of_stock_rate, 0.0)


class RecommendationsTest(SeededCatalogTestCase):
    def test_top_rated_and_best_sellers(self):
        picks = recommendations(self.products)
        self.assertEqual(
            slugs(picks.top_rated),
            [
                "professional-yoga-mat",
                "premium-wireless-headphones",
                "smart-home-hub",
                "organic-cotton-tshirt",
                "minimalist-desk-lamp",
                "the-art-of-code",
            ],
        )
        self.assertEqual(
            slugs(picks.best_sellers)[:3],
            ["premium-wireless-headphones", "professional-yoga-mat", "smart-home-hub"],
        )

    def test_by_category(self):
        picks = recommendations(self.products, per_category_n=1)
        self.assertEqual(
            sorted(picks.by_category),
            ["Books", "Electronics", "Fashion", "Home", "Sports"],
        )
        self.assertEqual(slugs(picks.by_category["Electronics"]), ["premium-wireless-headphones"])

    def test_empty_catalog(self):
        picks = recommendations([])
        self.assertEqual(picks.top_rated, [])
        self.assertEqual(picks.best_sellers, [])
        self.assertTrue(all(items == [] for items in picks.by_category.values()))


class PageRevalidatorTest(unittest.TestCase):
    def test_revalidate_product_marks_detail_and_home(self):
        revalidator = PageRevalidator()
        self.assertIsNone(revalidator.last_revalidated("/"))

        paths = revalidator.revalidate_product("Desk-Lamp")

        self.assertEqual(paths, ["/products/desk-lamp", "/"])
        self.assertIsNotNone(revalidator.last_revalidated("/products/desk-lamp"))
        self.assertIsNotNone(revalidator.last_revalidated("/"))

    def test_later_revalidation_moves_forward(self):
        revalidator = PageRevalidator()
        revalidator.revalidate("/")
        first = revalidator.last_revalidated("/")
        revalidator.revalidate("/")
        self.assertGreaterEqual(revalidator.last_revalidated("/"), first)

    def test_product_path(self):
        self.assertEqual(product_path("smart-home-hub"), "/products/smart-home-hub")


if __name__ == "__main__":
    unittest.main()
