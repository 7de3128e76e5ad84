"""Tests for filter specification building and evaluation."""

from datetime import datetime

import pytest

from app.catalog.categories import CategoryFilter
from app.catalog.filters import (
    DateRange,
    FilterSpec,
    FilterSpecBuilder,
    NumericRange,
    StockStatus,
)
from app.models.product import ProductDocument


def product(**fields) -> ProductDocument:
    data = {"name": "Gold Bar", "price": 100, "stock": 5, "isActive": True}
    data.update(fields)
    return ProductDocument.model_validate(data)


@pytest.fixture
def builder() -> FilterSpecBuilder:
    """Create a filter builder."""
    return FilterSpecBuilder()


class TestFilterSpecBuilder:
    """Tests for FilterSpecBuilder.build."""

    def test_empty_params(self, builder: FilterSpecBuilder) -> None:
        """No parameters constrain nothing but the active flag."""
        spec = builder.build({})
        assert spec == FilterSpec()
        assert spec.to_query() == {"isActive": True}

    def test_search_is_trimmed(self, builder: FilterSpecBuilder) -> None:
        """Search text is trimmed."""
        assert builder.build({"search": "  krugerrand  "}).search == "krugerrand"

    def test_blank_search_is_ignored(self, builder: FilterSpecBuilder) -> None:
        """Whitespace-only search adds no predicate."""
        assert builder.build({"search": "   "}).search is None

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("bars", CategoryFilter.BARS),
            ("COINS", CategoryFilter.COINS),
            ("all", None),
            ("medals", None),
            ("", None),
        ],
    )
    def test_category(self, builder: FilterSpecBuilder, raw: str, expected) -> None:
        """Only bars and coins narrow the category."""
        assert builder.build({"category": raw}).category == expected

    def test_price_range_both_bounds(self, builder: FilterSpecBuilder) -> None:
        """Both price bounds are kept."""
        spec = builder.build({"minPrice": "100", "maxPrice": "2500.50"})
        assert spec.price == NumericRange(min=100, max=2500.5)

    def test_price_range_asymmetric(self, builder: FilterSpecBuilder) -> None:
        """An invalid bound is dropped without affecting the other one."""
        spec = builder.build({"minPrice": "cheap", "maxPrice": "900"})
        assert spec.price == NumericRange(max=900)

    def test_price_range_invalid(self, builder: FilterSpecBuilder) -> None:
        """Two invalid bounds leave price unconstrained."""
        assert builder.build({"minPrice": "x", "maxPrice": ""}).price is None

    def test_stock_range(self, builder: FilterSpecBuilder) -> None:
        """Stock bounds parse like price bounds."""
        spec = builder.build({"minStock": "5"})
        assert spec.stock == NumericRange(min=5)
        assert spec.stock_status is None

    def test_stock_status_overrides_stock_range(self, builder: FilterSpecBuilder) -> None:
        """A recognized stock status replaces explicit stock bounds."""
        spec = builder.build({"minStock": "20", "maxStock": "40", "stockStatus": "low-stock"})
        assert spec.stock is None
        assert spec.stock_status is StockStatus.LOW_STOCK
        assert spec.to_query()["stock"] == {"$gt": 0, "$lte": 10}

    def test_unknown_stock_status_keeps_stock_range(self, builder: FilterSpecBuilder) -> None:
        """An unrecognized stock status is ignored."""
        spec = builder.build({"minStock": "20", "stockStatus": "plenty"})
        assert spec.stock_status is None
        assert spec.stock == NumericRange(min=20)

    def test_multi_value_dimensions(self, builder: FilterSpecBuilder) -> None:
        """Scalar and list values become membership sets."""
        spec = builder.build(
            {
                "weight": "1 oz",
                "purity": ["999.9", "", "916"],
                "brand": [],
                "manufacturer": "",
                "placement": ["featured"],
            }
        )
        assert spec.weight == ("1 oz",)
        assert spec.purity == ("999.9", "916")
        assert spec.brand == ()
        assert spec.manufacturer == ()
        assert spec.placement == ("featured",)

    def test_date_range_end_of_day(self, builder: FilterSpecBuilder) -> None:
        """dateFrom starts at midnight and dateTo runs to the last millisecond."""
        spec = builder.build({"dateFrom": "2024-01-10", "dateTo": "2024-01-15"})
        assert spec.created_at == DateRange(
            start=datetime(2024, 1, 10),
            end=datetime(2024, 1, 15, 23, 59, 59, 999000),
        )

    def test_date_range_open_start(self, builder: FilterSpecBuilder) -> None:
        """Only dateTo may be given."""
        spec = builder.build({"dateTo": "2024-01-15"})
        assert spec.created_at.start is None

    def test_invalid_dates_ignored(self, builder: FilterSpecBuilder) -> None:
        """Unparseable dates leave creation time unconstrained."""
        assert builder.build({"dateFrom": "soon", "dateTo": "later"}).created_at is None

    def test_dates_outside_calendar_in_utc_ignored(self, builder: FilterSpecBuilder) -> None:
        """Offsets that push a date past year 1 or 9999 leave creation time unconstrained."""
        spec = builder.build(
            {"dateFrom": "9999-12-31T23:00:00-05:00", "dateTo": "0001-01-01T00:00:00+05:00"}
        )
        assert spec.created_at is None

    def test_never_raises_on_garbage(self, builder: FilterSpecBuilder) -> None:
        """Every dimension tolerates malformed input."""
        spec = builder.build(
            {
                "search": ["", "  "],
                "category": "???",
                "minPrice": "NaN",
                "maxStock": "lots",
                "stockStatus": ["", "in-stock"],
                "dateFrom": "2024-02-30",
            }
        )
        assert spec == FilterSpec(stock_status=StockStatus.IN_STOCK)


class TestFilterSpecQuery:
    """Tests for the MongoDB rendering of a FilterSpec."""

    def test_full_query(self) -> None:
        """Every dimension maps to one condition."""
        spec = FilterSpec(
            search="1 oz (bar)",
            category=CategoryFilter.COINS,
            price=NumericRange(min=10),
            stock=NumericRange(max=50),
            purity=("999.9", "916"),
            created_at=DateRange(end=datetime(2024, 1, 15, 23, 59, 59, 999000)),
        )
        assert spec.to_query() == {
            "isActive": True,
            "$or": [
                {"name": {"$regex": r"1\ oz\ \(bar\)", "$options": "i"}},
                {"description": {"$regex": r"1\ oz\ \(bar\)", "$options": "i"}},
                {"brand": {"$regex": r"1\ oz\ \(bar\)", "$options": "i"}},
                {"manufacturer": {"$regex": r"1\ oz\ \(bar\)", "$options": "i"}},
            ],
            "name": {"$regex": "coin", "$options": "i"},
            "price": {"$gte": 10},
            "stock": {"$lte": 50},
            "purity": {"$in": ["999.9", "916"]},
            "createdAt": {"$lte": datetime(2024, 1, 15, 23, 59, 59, 999000)},
        }

    @pytest.mark.parametrize(
        "status,condition",
        [
            (StockStatus.IN_STOCK, {"$gt": 0}),
            (StockStatus.OUT_OF_STOCK, 0),
            (StockStatus.LOW_STOCK, {"$gt": 0, "$lte": 10}),
            (StockStatus.HIGH_STOCK, {"$gt": 50}),
        ],
    )
    def test_stock_status_conditions(self, status: StockStatus, condition) -> None:
        """Each stock status renders its own stock condition."""
        assert FilterSpec(stock_status=status).to_query()["stock"] == condition


class TestFilterSpecMatches:
    """Tests for in-process evaluation of a FilterSpec."""

    def test_inactive_never_matches(self) -> None:
        """Inactive products are excluded even without filters."""
        assert not FilterSpec().matches(product(isActive=False))

    def test_search_any_field_case_insensitive(self) -> None:
        """Search matches a substring of any searchable field."""
        spec = FilterSpec(search="suisse")
        assert spec.matches(product(manufacturer="PAMP Suisse"))
        assert not spec.matches(product(manufacturer="Valcambi"))

    def test_search_is_literal(self) -> None:
        """Regex metacharacters in search text match literally."""
        spec = FilterSpec(search="(limited)")
        assert spec.matches(product(description="Dragon (Limited) edition"))
        assert not spec.matches(product(description="limited"))

    def test_category(self) -> None:
        """Category filters look for the keyword in the name."""
        spec = FilterSpec(category=CategoryFilter.BARS)
        assert spec.matches(product(name="Minted BAR 10g"))
        assert not spec.matches(product(name="Maple Leaf Coin"))

    @pytest.mark.parametrize(
        "stock,expected",
        [(0, False), (1, True), (10, True), (11, False)],
    )
    def test_low_stock(self, stock: int, expected: bool) -> None:
        """Low stock means between 1 and 10 units."""
        assert FilterSpec(stock_status=StockStatus.LOW_STOCK).matches(product(stock=stock)) is expected

    def test_price_bounds_inclusive(self) -> None:
        """Price bounds include their endpoints."""
        spec = FilterSpec(price=NumericRange(min=100, max=200))
        assert spec.matches(product(price=100))
        assert spec.matches(product(price=200))
        assert not spec.matches(product(price=200.01))

    def test_membership_or_semantics(self) -> None:
        """Any listed value satisfies a membership dimension."""
        spec = FilterSpec(purity=("999.9", "916"))
        assert spec.matches(product(purity="916"))
        assert not spec.matches(product(purity="999"))
        assert not spec.matches(product())

    def test_date_range(self) -> None:
        """dateTo includes the whole day and nothing after it."""
        spec = FilterSpecBuilder().build({"dateTo": "2024-01-15"})
        assert spec.matches(product(createdAt=datetime(2024, 1, 15, 23, 59, 59)))
        assert not spec.matches(product(createdAt=datetime(2024, 1, 16, 0, 0, 0, 1000)))
        assert not spec.matches(product(createdAt=None))

    def test_date_range_aware_timestamps(self) -> None:
        """Timezone-aware creation times compare in UTC."""
        spec = FilterSpecBuilder().build({"dateFrom": "2024-01-16"})
        assert spec.matches(product(createdAt="2024-01-15T23:30:00-01:00"))
        assert not spec.matches(product(createdAt="2024-01-15T23:30:00+00:00"))

    def test_dimensions_combine_with_and(self) -> None:
        """A product must satisfy every dimension."""
        spec = FilterSpec(category=CategoryFilter.BARS, brand=("PAMP",))
        assert spec.matches(product(name="Gold Bar", brand="PAMP"))
        assert not spec.matches(product(name="Gold Bar", brand="Valcambi"))
        assert not spec.matches(product(name="Gold Coin", brand="PAMP"))
