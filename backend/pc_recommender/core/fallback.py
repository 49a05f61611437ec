"""
Static candidates served when Canopy is not configured or the search fails.

Unlike parsed listings, these don't use the URL as id: each has a distinct
"mock-N" id and they all link to the same placeholder Amazon page. Anything
keyed on listing identity must use `id`, never `url`.
"""

from typing import List

from pc_recommender.schemas.pc import StorageKind, StructuredListing

FALLBACK_CANDIDATES: List[StructuredListing] = [
    StructuredListing(
        id="mock-1",
        title="CyberPowerPC Gamer Xtreme VR Gaming PC (Intel Core i5, RTX 4060, 16GB RAM, 1TB NVMe SSD)",
        url="https://www.amazon.com/",
        price=1099,
        cpu="Intel Core i5",
        gpu="NVIDIA GeForce RTX 4060",
        ram_gb=16,
        storage_gb=1024,
        storage_kind=StorageKind.SSD,
        color="black",
    ),
    StructuredListing(
        id="mock-2",
        title="Skytech Gaming Chronos Mini (Ryzen 5, RTX 4060 Ti, 16GB RAM, 1TB SSD)",
        url="https://www.amazon.com/",
        price=1299,
        cpu="AMD Ryzen 5",
        gpu="NVIDIA GeForce RTX 4060 Ti",
        ram_gb=16,
        storage_gb=1024,
        storage_kind=StorageKind.SSD,
        color="white",
    ),
    StructuredListing(
        id="mock-3",
        title="iBUYPOWER Slate 8 Gaming Desktop (Intel Core i7, RTX 4070, 32GB RAM, 2TB NVMe SSD)",
        url="https://www.amazon.com/",
        price=1899,
        cpu="Intel Core i7",
        gpu="NVIDIA GeForce RTX 4070",
        ram_gb=32,
        storage_gb=2048,
        storage_kind=StorageKind.SSD,
        color="black",
    ),
    # No dedicated GPU
    StructuredListing(
        id="mock-4",
        title="Dell Inspiron Desktop (Intel Core i5, 16GB RAM, 512GB SSD)",
        url="https://www.amazon.com/",
        price=749,
        cpu="Intel Core i5",
        ram_gb=16,
        storage_gb=512,
        storage_kind=StorageKind.SSD,
        color="silver",
    ),
    StructuredListing(
        id="mock-5",
        title="HP Pavilion Desktop (Intel Core i3, 8GB RAM, 256GB SSD)",
        url="https://www.amazon.com/",
        price=499,
        cpu="Intel Core i3",
        ram_gb=8,
        storage_gb=256,
        storage_kind=StorageKind.SSD,
        color="black",
    ),
]
