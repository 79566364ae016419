import typing as t

import pydantic as p


class BaseModel(p.BaseModel):
    """
    Common base for beacon records and settings.

    Fields are dumped under their aliases unless the caller asks otherwise, so
    settings such as the logging section serialize straight into the keys
    `logging.config.dictConfig` expects (`class`, `()`).
    """

    model_config = p.ConfigDict(populate_by_name=True)

    def model_dump(self, *, by_alias: bool | None = True, **kwargs: t.Any) -> dict[str, t.Any]:
        return super().model_dump(by_alias=by_alias, **kwargs)
