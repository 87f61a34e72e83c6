"""
Default cache generation name and precache allowlist for the portfolio site.

Bump CACHE_NAME on every deploy that changes a precached asset.
"""

CACHE_NAME = "portfolio-cache-v1"

PRECACHE_URLS = (
    "/",
    "/index.html",
    "/css/custom.css",
    "/js/main.js",
    "/images/about-me.png",
    "/images/about-me1.png",
    "/images/bg_1.jpg",
    "/images/Inventory.jpg",
    "/images/loc.png",
    "/images/proj_1.jpg",
    "/images/proj_2.jpg",
    "/images/proj_3.jpg",
    "/images/icons/arcgis.png",
    "/images/icons/excel.png",
    "/images/icons/python.png",
    "/images/icons/qgis.png",
    "/images/icons/terrset.png",
    "https://cdn.jsdelivr.net/npm/bootstrap@5.3.0/dist/css/bootstrap.min.css",
    "https://cdn.jsdelivr.net/npm/bootstrap@5.3.0/dist/js/bootstrap.bundle.min.js",
    "https://unpkg.com/aos@2.3.1/dist/aos.js",
    "https://unpkg.com/aos@2.3.1/dist/aos.css",
    "https://cdnjs.cloudflare.com/ajax/libs/font-awesome/5.15.4/css/all.min.css",
)
