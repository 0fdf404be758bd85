"""Helper modules for E2E testing."""

from .config import (
    DEFAULT_VIEWPORT,
    DEFAULT_NAVIGATION_TIMEOUT_MS,
    CART_BLOCK_PAGE_TITLE,
    CART_BLOCK_PAGE_SLUG,
    PAGE_EDITOR_PATH,
    ADD_TO_CART_PATH,
    STORE_API_CART_GLOB,
    TEST_RESULTS_DIR,
    apply_navigation_timeout,
)

from .editor import (
    disable_welcome_guide,
    go_to_page_editor,
    get_canvas,
    fill_page_title,
    insert_block_by_shortcut,
    publish_page,
)

from .cart import (
    add_a_product_to_cart,
    open_cart_page,
    set_shipping_address,
    select_shipping_method,
    increase_quantity,
)

from .assertions import (
    expect_shipping_option,
    expect_free_shipping_price,
    expect_shipping_row,
    expect_price_visible,
    expect_nth_price,
    expect_exact_price_span,
)

__all__ = [
    # Config
    "DEFAULT_VIEWPORT",
    "DEFAULT_NAVIGATION_TIMEOUT_MS",
    "CART_BLOCK_PAGE_TITLE",
    "CART_BLOCK_PAGE_SLUG",
    "PAGE_EDITOR_PATH",
    "ADD_TO_CART_PATH",
    "STORE_API_CART_GLOB",
    "TEST_RESULTS_DIR",
    "apply_navigation_timeout",
    # Editor
    "disable_welcome_guide",
    "go_to_page_editor",
    "get_canvas",
    "fill_page_title",
    "insert_block_by_shortcut",
    "publish_page",
    # Cart
    "add_a_product_to_cart",
    "open_cart_page",
    "set_shipping_address",
    "select_shipping_method",
    "increase_quantity",
    # Assertions
    "expect_shipping_option",
    "expect_free_shipping_price",
    "expect_shipping_row",
    "expect_price_visible",
    "expect_nth_price",
    "expect_exact_price_span",
]
