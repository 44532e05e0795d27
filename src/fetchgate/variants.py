import typing

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from fetchgate.config import ConfigManager


class ProxyVariant(BaseModel):
    """One concrete configuration of the resource proxy.

    A variant either takes the upstream URL from the caller (``url_param``)
    or always fetches the same upstream (``fixed_url``), never both.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    route: str
    label: str
    url_param: typing.Optional[str] = Field(default=None, min_length=1)
    fixed_url: typing.Optional[str] = Field(default=None, min_length=1)
    headers: typing.Dict[str, str] = {}
    default_content_type: typing.Optional[str] = None
    cache_max_age: typing.Optional[int] = None
    cors_origin: typing.Optional[str] = None
    json_passthrough: bool = False

    @model_validator(mode="after")
    def validate_upstream(self):
        if (self.url_param is None) == (self.fixed_url is None):
            raise ValueError(
                f"Variant '{self.name}' must set exactly one of `url_param` or `fixed_url`"
            )
        if self.cache_max_age is not None and self.cache_max_age < 0:
            raise ValueError(f"Variant '{self.name}': `cache_max_age` must be >= 0")
        if not self.route.startswith("/"):
            raise ValueError(f"Variant '{self.name}': `route` must start with '/'")
        return self

    @property
    def requires_url(self) -> bool:
        return self.url_param is not None

    def cache_control(self) -> str | None:
        if self.cache_max_age is None:
            return None
        return f"public, max-age={self.cache_max_age}"

    def describe(self) -> typing.Dict[str, typing.Any]:
        # Header values may carry credentials, only their names are exposed.
        data = self.model_dump(exclude={"headers"})
        data["headers"] = sorted(self.headers)
        return data


class VariantSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str = "1"
    variants: typing.List[ProxyVariant]

    @model_validator(mode="after")
    def validate_unique(self):
        for field in ("name", "route"):
            values = [getattr(v, field) for v in self.variants]
            duplicates = sorted({v for v in values if values.count(v) > 1})
            if duplicates:
                raise ValueError(f"Duplicated variant {field}s: {', '.join(duplicates)}")
        return self

    def get(self, name: str) -> ProxyVariant:
        for variant in self.variants:
            if variant.name == name:
                return variant
        raise KeyError(f"Unknown proxy variant: '{name}'")


def default_variants(config: ConfigManager) -> VariantSet:
    return VariantSet(
        variants=[
            ProxyVariant(
                name="font",
                label="font",
                route="/api/fontProxy",
                url_param="url",
                default_content_type="font/woff2",
                cache_max_age=86400,
                cors_origin="*",
            ),
            ProxyVariant(
                name="image",
                label="image",
                route="/api/imageProxy",
                url_param="url",
                default_content_type="image/png",
                cache_max_age=3600,
            ),
            ProxyVariant(
                name="catalog",
                label="catalog",
                route="/api/store-movies",
                fixed_url=config.CATALOG_URL,
                headers={
                    "Accept": "application/json",
                    "X-API-Key": config.CATALOG_API_KEY,
                    "X-API-User-Agent": config.CATALOG_USER_AGENT,
                },
                json_passthrough=True,
            ),
        ],
    )


def load_variants(path: str) -> VariantSet:
    with open(path, "r") as f:
        data = yaml.safe_load(f)

    # An empty document validates as an empty mapping
    return VariantSet.model_validate(data or {})
