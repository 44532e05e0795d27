import typing

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator


class ColorTokens(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary: str = "blue"
    neutral: str = "slate"


class ComponentTheme(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    slots: typing.Dict[str, str] = {}
    variants: typing.Dict[str, typing.Dict[str, str]] = {}
    default_variants: typing.Dict[str, str] = Field(default={}, alias="defaultVariants")

    @model_validator(mode="after")
    def validate_defaults(self):
        for key, choice in self.default_variants.items():
            if choice not in self.variants.get(key, {}):
                raise ValueError(f"Default variant '{key}={choice}' is not declared")
        return self

    def resolve(self, slot: str = "base", **choices: str) -> str:
        """Class string for ``slot`` with the chosen (or default) variants applied."""
        classes = [self.slots[slot]] if slot in self.slots else []
        selected = {**self.default_variants, **choices}
        for key, choice in selected.items():
            options = self.variants.get(key, {})
            if choice not in options:
                raise KeyError(f"Unknown variant '{key}={choice}'")
            classes.append(options[choice])
        return " ".join(classes)


class UIConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    colors: ColorTokens = ColorTokens()
    components: typing.Dict[str, ComponentTheme] = {}

    def component(self, name: str) -> ComponentTheme:
        if name not in self.components:
            raise KeyError(f"Unknown component: '{name}'")
        return self.components[name]


DEFAULT_UI_CONFIG = UIConfig(
    colors=ColorTokens(primary="blue", neutral="slate"),
    components={
        "button": ComponentTheme(
            slots={
                "base": (
                    "rounded px-4 py-2 text-center uppercase leading-8 border-none "
                    "cursor-pointer justify-center disabled:[--tw-bg-opacity:0.8] font-normal"
                ),
            },
            variants={"size": {"xxl": "text-lg"}},
            default_variants={"size": "xxl"},
        ),
        "formField": ComponentTheme(
            slots={"label": "block mt-2 text-neutral-700 dark:text-neutral-200"},
        ),
    },
)


def load_ui_config(path: str | None = None) -> UIConfig:
    if not path:
        return DEFAULT_UI_CONFIG

    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    # Accept both a bare document and one nested under `ui:`
    if isinstance(data, dict):
        data = data.get("ui", data)
    return UIConfig.model_validate(data)
