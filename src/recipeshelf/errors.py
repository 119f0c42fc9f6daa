class RecipeshelfError(Exception):
    pass


class ConfigError(RecipeshelfError):
    pass


class RecipeNotFoundError(RecipeshelfError):
    def __init__(self, title: str) -> None:
        super().__init__(f"Recipe not found: {title!r}")
        self.title = title


class ServeError(RecipeshelfError):
    pass
