"""Common literal values used across siteforge.

These constants keep directory names, filename conventions, and generated
descriptor patterns centralized so the page builder, asset pipeline, and
generators agree on where things live. Intended for internal use within the
siteforge package.

Examples
--------
>>> from siteforge import _constants
>>> _constants.GENERATED_PAGE_TEMPLATE.format(page="product-chair")
'_generated-product-chair.json'
>>> _constants.BUILD_SCRIPT_TEMPLATE.format(name="faq")
'faq.build.py'
"""

DEFAULT_CONFIG_FILE = "config.json"
DEFAULT_LAYOUT = "_layout"
DEFAULT_HEADER_THEME = "light"

COMPONENTS_DIR = "components"
PAGES_DIR = "pages"
OUTPUT_DIR = "build"
ASSETS_DIR = "assets"

GENERATORS_DIR = "_generators"
DETAIL_PAGE_DIR = "_product-detail"
DETAIL_TEMPLATE_FILE = "_detail-template.html"
DETAIL_ASSET_NAME = "product-detail"
CATALOG_DIR = "products"
CATALOG_METADATA_FILE = "product.json"
CATALOG_PAGE_PREFIX = "product-"

BUILD_SCRIPT_TEMPLATE = "{name}.build.py"
GENERATOR_SCRIPT_GLOB = "*.build.py"
GENERATED_PAGE_TEMPLATE = "_generated-{page}.json"
GENERATED_PAGE_GLOB = "_generated-*.json"

COMPONENT_STYLESHEET = "style.css"
COMPONENT_SCRIPT = "script.js"
GLOBAL_STYLESHEET = "assets/css/global.css"
GLOBAL_SCRIPT = "assets/js/main.js"
HIGHLIGHT_STYLESHEET = "assets/css/codehilite.css"

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")

# Sub-components stored inside their parent component's folder.
SUB_COMPONENT_ALIASES: dict[str, str] = {
    "faqItem": "faq",
    "productCard": "products",
    "header-light": "header",
    "header-dark": "header",
}
