"""Configuration settings for declaration generation.

@public

Settings are loaded from environment variables (prefixed ``DECLGEN_``) with
.env file support via pydantic-settings. Mapping values are read as JSON.

Environment variables:
    DECLGEN_NAMESPACE_NAME: Name of the generated namespace (e.g. Highcharts)
    DECLGEN_MAIN_MODULE: Module path of the main product
    DECLGEN_GLOBALS_MODULE: Module path of the shared globals module
    DECLGEN_PRODUCTS: JSON object mapping product name to module path
    DECLGEN_MODULAR_PRODUCTS: JSON object mapping modular product to module path
    DECLGEN_WILDCARD_TYPE: Type that replaces unresolvable type references
    DECLGEN_SEE_LINK_BASE: Base URL of the API reference
    DECLGEN_WITHOUT_LINKS: Disable @see links in generated declarations

Example:
    >>> from declgen.settings import settings
    >>> settings.namespace_name
    'Highcharts'

Note:
    Settings are loaded once at module import and frozen. Generators accept
    an explicit Settings instance when a different configuration is needed.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration of products, module paths and output conventions.

    @public

    Attributes:
        namespace_name: Root namespace every generated type is declared in.
        main_module: Module path of the main product namespace.
        globals_module: Module path holding global (non-namespaced) declarations.
        products: Product name to module path for every full product.
        modular_products: Product name to module path for products that ship
                          as a module on top of the main product.
        wildcard_type: Type substituted for references that do not resolve.
        see_link_base: Base URL used to build API reference links.
        without_links: When set, no @see links are generated.
        copyright: Header text of every generated module.
    """

    model_config = SettingsConfigDict(
        env_prefix="DECLGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    namespace_name: str = "Highcharts"
    main_module: str = "code/highcharts"
    globals_module: str = "code/globals"
    products: dict[str, str] = {
        "highcharts": "code/highcharts",
        "highstock": "code/highstock",
        "highmaps": "code/highmaps",
        "gantt": "code/highcharts-gantt",
    }
    modular_products: dict[str, str] = {
        "highstock": "code/modules/stock",
        "highmaps": "code/modules/map",
        "gantt": "code/modules/gantt",
    }
    wildcard_type: str = "any"
    see_link_base: str = "https://api.highcharts.com/"
    without_links: bool = False
    copyright: str = "Copyright (c) Highsoft AS. All rights reserved."

    @property
    def product_modules(self) -> dict[str, str]:
        """Module path to product name."""
        return {module: product for product, module in self.products.items()}

    @property
    def modular_product_modules(self) -> dict[str, str]:
        """Module path to modular product name."""
        return {module: product for product, module in self.modular_products.items()}

    def see_link(self, name: str, kind: str, product: str = "highcharts") -> str:
        """Build the API reference link of a documented name."""
        base = self.see_link_base.rstrip("/")
        name = name.removeprefix(f"{self.namespace_name}.")
        match kind:
            case "option":
                return f"{base}/{product}/{name}"
            case "class" | "interface" | "namespace":
                return f"{base}/class-reference/{self.namespace_name}.{name}"
            case _:
                return f"{base}/class-reference/{self.namespace_name}#{name}"


settings = Settings()
"""Global settings instance used when no explicit Settings is passed."""
