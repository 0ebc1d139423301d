import pytest

from shared.exceptions import ProductNotFoundError
from shared.models.products_model import ProductCreate, ProductUpdate
from modules.catalog.services.product_service import ProductService
from modules.catalog.services.startup_normalizer import StartupNormalizer


pytestmark = [pytest.mark.integration, pytest.mark.slow]


PLACEHOLDER = "https://via.placeholder.com/300"


class TestStartupNormalizerIntegration:
    @pytest.fixture
    def normalizer(self, products_collection) -> StartupNormalizer:
        return StartupNormalizer(collection=products_collection, placeholder_urls=[PLACEHOLDER])

    def test_normalize_product_images(self, normalizer: StartupNormalizer, products_collection):
        products_collection.insert_many([
            {"title": "a", "image": "https://i.ibb.co.com/x.png"},
            {"title": "b", "image": "http://i.ibb.co.com/dir/y.jpg"},
            {"title": "c", "image": PLACEHOLDER},
            {"title": "d", "image": "https://i.ibb.co/ok.png"},
            {"title": "e", "image": None},
        ])

        modified = normalizer.normalize_product_images()

        assert modified == 3
        images = {d["title"]: d["image"] for d in products_collection.find()}
        assert images == {
            "a": "https://i.ibb.co/x.png",
            "b": "http://i.ibb.co/dir/y.jpg",
            "c": None,
            "d": "https://i.ibb.co/ok.png",
            "e": None,
        }

    def test_host_rewrite_only_touches_the_host(
        self,
        normalizer: StartupNormalizer,
        products_collection,
    ):
        products_collection.insert_many([
            {"title": "lookalike", "image": "https://i.ibb.co.community/x.png"},
            {"title": "in-path", "image": "https://cdn.example.com/i.ibb.co.com/x.png"},
            {"title": "twice", "image": "https://i.ibb.co.com/a/i.ibb.co.com/b.png"},
        ])

        assert normalizer.normalize_product_images() == 1

        images = {d["title"]: d["image"] for d in products_collection.find()}
        assert images == {
            "lookalike": "https://i.ibb.co.community/x.png",
            "in-path": "https://cdn.example.com/i.ibb.co.com/x.png",
            "twice": "https://i.ibb.co/a/i.ibb.co.com/b.png",
        }

    def test_normalize_is_idempotent(self, normalizer: StartupNormalizer, products_collection):
        products_collection.insert_many([
            {"title": "a", "image": "https://i.ibb.co.com/x.png"},
            {"title": "c", "image": PLACEHOLDER},
        ])

        assert normalizer.normalize_product_images() == 2
        assert normalizer.normalize_product_images() == 0

    def test_backfill_categories(self, products_collection):
        products_collection.insert_many([{"title": f"p{i}", "order": i} for i in range(33)])
        normalizer = StartupNormalizer(collection=products_collection, placeholder_urls=[])

        counts = normalizer.backfill_categories()

        assert counts == {"Bike": 10, "Car": 10, "Bicycle": 10}
        by_order = {d["order"]: d.get("category") for d in products_collection.find()}
        assert all(by_order[i] == "Bike" for i in range(0, 10))
        assert all(by_order[i] == "Car" for i in range(10, 20))
        assert all(by_order[i] == "Bicycle" for i in range(20, 30))
        assert all(by_order[i] is None for i in range(30, 33))


class TestProductServiceIntegration:
    @pytest.fixture
    def product_service(self, products_collection) -> ProductService:
        return ProductService(collection=products_collection)

    def test_crud_lifecycle(self, product_service: ProductService):
        product_id = product_service.create_product(
            ProductCreate(title="Civic", brand="Honda", price=12000, image="https://i.ibb.co/c.png")
        )

        product = product_service.get_product(product_id)
        assert product.title == "Civic"
        assert product.created_at is not None

        product_service.update_product(product_id, ProductUpdate(price=11000, category="Car"))
        updated = product_service.get_product(product_id)
        assert updated.price == 11000
        assert updated.category == "Car"
        assert updated.title == "Civic"

        assert [p.id for p in product_service.list_products()] == [product_id]

        product_service.delete_product(product_id)
        with pytest.raises(ProductNotFoundError):
            product_service.get_product(product_id)

    def test_stored_field_names_are_camel_case(
        self,
        product_service: ProductService,
        products_collection,
    ):
        product_id = product_service.create_product(
            ProductCreate(
                title="Civic",
                brand="Honda",
                price=1,
                short_description="Clean title",
                user_id="u-1",
            )
        )
        product_service.update_product(product_id, ProductUpdate(short_description="New tyres"))

        doc = products_collection.find_one()
        assert doc["shortDescription"] == "New tyres"
        assert doc["userId"] == "u-1"
        assert "createdAt" in doc
        assert not {"short_description", "user_id", "created_at"} & set(doc)

    def test_reads_legacy_records(self, product_service: ProductService, products_collection):
        legacy_id = products_collection.insert_one({
            "title": "R15",
            "brand": "Yamaha",
            "price": "4500",
            "shortDescription": "One owner",
            "userId": "u-9",
        }).inserted_id

        product = product_service.get_product(str(legacy_id))

        assert product.short_description == "One owner"
        assert product.user_id == "u-9"
