"""Domain model for the blog-wide preference."""

from pydantic import BaseModel, Field, ConfigDict


class Preference(BaseModel):
    """Global blog settings."""
    model_config = ConfigDict(populate_by_name=True)

    allow_register: bool = Field(False, alias="allowRegister")
    blog_title: str = Field("", alias="blogTitle")
    serve_path: str = Field("", alias="servePath")
