from pydantic import BaseModel, ConfigDict, Field, field_validator

POST_ID_PLACEHOLDER = "{post_id}"


class MetadataRecord(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    image: str = Field(min_length=1)


class PostMetadataTemplate(MetadataRecord):
    """Post metadata with `{post_id}` substituted literally at request time."""

    @field_validator("title", "description", "image")
    @classmethod
    def must_embed_post_id(cls, value: str) -> str:
        if POST_ID_PLACEHOLDER not in value:
            raise ValueError(f"post template must contain {POST_ID_PLACEHOLDER}")
        return value


class SiteConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    site_name: str = Field(default="React SSR Meta Template", min_length=1)
    twitter_site: str | None = None
    post_prefix: str = "/post/"
    home: MetadataRecord = MetadataRecord(
        title="Home Page",
        description="Welcome to the home page of our server-rendered React application.",
        image="https://placehold.co/1200x630/png?text=Home",
    )
    post: PostMetadataTemplate = PostMetadataTemplate(
        title="Post {post_id}",
        description="This is the description for post {post_id}.",
        image="https://placehold.co/1200x630/png?text=Post+{post_id}",
    )
    featured_posts: list[str] = Field(default_factory=lambda: ["1", "2", "123"])

    @field_validator("post_prefix")
    @classmethod
    def prefix_shape(cls, value: str) -> str:
        if not value.startswith("/") or not value.endswith("/") or value == "/":
            raise ValueError("post_prefix must look like '/segment/'")
        return value
