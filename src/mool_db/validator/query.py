"""Validated query-string parameters for list/read endpoints."""

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from mool_db.utils.projection import QueryShape

from .rules import Fields, PageNumber, PageSize, ProjectionObject


class QueryParams(BaseModel):
    """
    Common read parameters accepted from clients.

    ``f`` is the field list (a single name or several), validated here and
    then filtered through the allow-list when converted to a QueryShape.
    """

    model_config = ConfigDict(populate_by_name=True)

    fields: Fields = Field(None, alias="f")
    page_number: PageNumber | None = None
    page_size: PageSize | None = None
    projection: ProjectionObject = None

    def to_shape(self, allowed_attributes: Mapping[str, str] | None = None) -> QueryShape:
        """
        Build the QueryShape for these parameters.

        Args:
            allowed_attributes: Allow-list of field name -> storage path
        """
        return QueryShape(
            projection=self.projection,
            allowed_attributes=allowed_attributes,
            fields=self.fields,
            page_size=self.page_size,
            page_number=self.page_number,
        )
