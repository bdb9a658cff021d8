"""Sample catalogue loaded into fresh environments.

Seeding is idempotent: products that already exist are left untouched.
"""

import json
from datetime import UTC, datetime, timedelta

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.product.creation import AddProduct
from catalogue.product.product import Product

logger = structlog.get_logger(__name__)

_IMG = "https://images.unsplash.com/photo-{}?w=600&q=80"

SAMPLE_PRODUCTS = [
    # Electronics
    {
        "product_id": "e1",
        "name": "Wireless Noise-Canceling Headphones",
        "description": "Premium over-ear headphones with active noise cancellation, 30-hour battery life, "
        "and crystal-clear sound quality. Perfect for music lovers and professionals.",
        "price": 299.99,
        "original_price": 349.99,
        "category": "electronics",
        "image": _IMG.format("1505740420928-5e560c06d30e"),
        "rating": 4.8,
        "review_count": 234,
        "stock_count": 45,
        "featured": True,
        "tags": ["wireless", "noise-canceling", "premium"],
    },
    {
        "product_id": "e2",
        "name": "Smart Watch Pro",
        "description": "Advanced smartwatch with health monitoring, GPS tracking, and seamless smartphone "
        "integration. Water-resistant up to 50 meters.",
        "price": 449.99,
        "category": "electronics",
        "image": _IMG.format("1546868871-7041f2a55e12"),
        "rating": 4.6,
        "review_count": 189,
        "stock_count": 32,
        "featured": True,
        "tags": ["smart", "fitness", "premium"],
    },
    {
        "product_id": "e3",
        "name": "Portable Bluetooth Speaker",
        "description": "Compact yet powerful speaker with 360° sound, waterproof design, and 20-hour playtime. "
        "Take your music anywhere.",
        "price": 129.99,
        "original_price": 159.99,
        "category": "electronics",
        "image": _IMG.format("1608043152269-423dbba4e7e1"),
        "rating": 4.5,
        "review_count": 156,
        "stock_count": 78,
        "featured": False,
        "tags": ["portable", "waterproof", "bluetooth"],
    },
    {
        "product_id": "e4",
        "name": "Wireless Earbuds Elite",
        "description": "True wireless earbuds with premium sound, touch controls, and a sleek charging case. "
        "8 hours of playtime.",
        "price": 179.99,
        "category": "electronics",
        "image": _IMG.format("1590658268037-6bf12165a8df"),
        "rating": 4.4,
        "review_count": 312,
        "stock_count": 120,
        "featured": False,
        "tags": ["wireless", "compact", "premium"],
    },
    # Clothing
    {
        "product_id": "c1",
        "name": "Premium Cotton T-Shirt",
        "description": "Ultra-soft 100% organic cotton t-shirt with a modern fit. Breathable fabric perfect "
        "for everyday wear.",
        "price": 45.00,
        "category": "clothing",
        "image": _IMG.format("1521572163474-6864f9cf17ab"),
        "rating": 4.7,
        "review_count": 423,
        "stock_count": 200,
        "featured": True,
        "tags": ["organic", "casual", "essentials"],
    },
    {
        "product_id": "c2",
        "name": "Classic Denim Jacket",
        "description": "Timeless denim jacket with a comfortable fit and durable construction. A wardrobe "
        "staple for any season.",
        "price": 120.00,
        "original_price": 150.00,
        "category": "clothing",
        "image": _IMG.format("1576995853123-5a10305d93c0"),
        "rating": 4.6,
        "review_count": 198,
        "stock_count": 45,
        "featured": True,
        "tags": ["classic", "denim", "outerwear"],
    },
    {
        "product_id": "c3",
        "name": "Slim Fit Chinos",
        "description": "Versatile chinos with a modern slim fit. Perfect for both casual and semi-formal occasions.",
        "price": 79.99,
        "category": "clothing",
        "image": _IMG.format("1473966968600-fa801b869a1a"),
        "rating": 4.5,
        "review_count": 167,
        "stock_count": 89,
        "featured": False,
        "tags": ["slim-fit", "versatile", "smart-casual"],
    },
    {
        "product_id": "c4",
        "name": "Merino Wool Sweater",
        "description": "Luxuriously soft merino wool sweater that regulates temperature naturally. "
        "Lightweight yet warm.",
        "price": 145.00,
        "category": "clothing",
        "image": _IMG.format("1434389677669-e08b4cac3105"),
        "rating": 4.8,
        "review_count": 134,
        "stock_count": 56,
        "featured": False,
        "tags": ["merino", "luxury", "winter"],
    },
    # Home & Garden
    {
        "product_id": "h1",
        "name": "Modern Ceramic Vase Set",
        "description": "Set of 3 handcrafted ceramic vases in minimalist design. Perfect for fresh or dried flowers.",
        "price": 89.99,
        "category": "home-garden",
        "image": _IMG.format("1578500494198-246f612d3b3d"),
        "rating": 4.7,
        "review_count": 89,
        "stock_count": 34,
        "featured": True,
        "tags": ["handcrafted", "minimalist", "decor"],
    },
    {
        "product_id": "h2",
        "name": "Indoor Plant Collection",
        "description": "Curated set of 4 low-maintenance indoor plants with decorative pots. Brighten any "
        "room naturally.",
        "price": 75.00,
        "original_price": 95.00,
        "category": "home-garden",
        "image": _IMG.format("1459411552884-841db9b3cc2a"),
        "rating": 4.6,
        "review_count": 145,
        "stock_count": 23,
        "featured": False,
        "tags": ["plants", "natural", "air-purifying"],
    },
    {
        "product_id": "h3",
        "name": "Scented Candle Collection",
        "description": "Set of 6 hand-poured soy candles with natural essential oils. 40-hour burn time each.",
        "price": 65.00,
        "category": "home-garden",
        "image": _IMG.format("1602028915047-37269d1a73f7"),
        "rating": 4.9,
        "review_count": 267,
        "stock_count": 89,
        "featured": True,
        "tags": ["natural", "aromatherapy", "handmade"],
    },
    {
        "product_id": "h4",
        "name": "Linen Throw Blanket",
        "description": "Premium linen throw blanket in a soothing neutral tone. Soft, breathable, and machine washable.",
        "price": 110.00,
        "category": "home-garden",
        "image": _IMG.format("1555041469-a586c61ea9bc"),
        "rating": 4.7,
        "review_count": 98,
        "stock_count": 41,
        "featured": False,
        "tags": ["linen", "cozy", "premium"],
    },
    # Accessories
    {
        "product_id": "a1",
        "name": "Leather Minimalist Wallet",
        "description": "Slim leather wallet with RFID protection. Holds 8 cards and features a sleek money clip.",
        "price": 69.99,
        "category": "accessories",
        "image": _IMG.format("1627123424574-724758594e93"),
        "rating": 4.8,
        "review_count": 312,
        "stock_count": 156,
        "featured": True,
        "tags": ["leather", "rfid", "minimalist"],
    },
    {
        "product_id": "a2",
        "name": "Classic Sunglasses",
        "description": "Timeless aviator-style sunglasses with polarized lenses and UV400 protection. Unisex design.",
        "price": 159.99,
        "original_price": 199.99,
        "category": "accessories",
        "image": _IMG.format("1572635196237-14b3f281503f"),
        "rating": 4.5,
        "review_count": 178,
        "stock_count": 67,
        "featured": False,
        "tags": ["polarized", "uv-protection", "classic"],
    },
    {
        "product_id": "a3",
        "name": "Canvas Weekender Bag",
        "description": "Durable canvas weekender bag with leather accents. Spacious main compartment and "
        "multiple pockets.",
        "price": 185.00,
        "category": "accessories",
        "image": _IMG.format("1553062407-98eeb64c6a62"),
        "rating": 4.7,
        "review_count": 124,
        "stock_count": 29,
        "featured": True,
        "tags": ["travel", "canvas", "durable"],
    },
]

# Creation timestamps follow list order so "newest" sorting is deterministic
_SEED_EPOCH = datetime(2024, 1, 1, tzinfo=UTC)


def seed_catalogue(products=None):
    """Add every sample product that is not in the catalogue yet. Returns the ids added."""
    repo = current_domain.repository_for(Product)
    added = []

    for index, data in enumerate(products or SAMPLE_PRODUCTS):
        try:
            repo.get(data["product_id"])
            continue
        except ObjectNotFoundError:
            pass

        payload = dict(data)
        payload["tags"] = json.dumps(payload.get("tags", []))
        payload["images"] = json.dumps(payload.get("images", [payload["image"]]))
        payload.setdefault("created_at", _SEED_EPOCH + timedelta(minutes=index))

        added.append(current_domain.process(AddProduct(**payload), asynchronous=False))

    if added:
        logger.info("Catalogue seeded", product_count=len(added))
    return added
