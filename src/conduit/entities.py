"""Domain values shared by pages and API decoders."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

Username = str
Slug = str
Tag = str
CommentId = str
ErrorMessage = str
PageNumber = int

FIRST_PAGE: PageNumber = 1
DEFAULT_AVATAR = "https://static.productionready.io/images/smiley-cyrus.jpg"


class Profile(BaseModel):
    """Public profile of an author."""

    model_config = ConfigDict(frozen=True)

    username: Username
    bio: str | None = None
    image: str | None = None

    @property
    def avatar_src(self) -> str:
        return self.image or DEFAULT_AVATAR


class AuthorRelation(str, Enum):
    """How an author relates to the current viewer."""

    IS_VIEWER = "is_viewer"
    FOLLOWING = "following"
    NOT_FOLLOWING = "not_following"


class Author(BaseModel):
    """Profile plus its relation to the viewer."""

    model_config = ConfigDict(frozen=True)

    profile: Profile
    relation: AuthorRelation = AuthorRelation.NOT_FOLLOWING

    @property
    def username(self) -> Username:
        return self.profile.username


class Article(BaseModel):
    """A published article."""

    model_config = ConfigDict(frozen=True)

    slug: Slug
    title: str
    description: str = ""
    body: str = ""
    tag_list: list[Tag] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    favorited: bool = False
    favorites_count: int = 0
    author: Author


class Comment(BaseModel):
    """A comment under an article."""

    model_config = ConfigDict(frozen=True)

    id: CommentId
    body: str
    created_at: datetime
    updated_at: datetime
    author: Author


class PaginatedList(BaseModel):
    """One page of articles and the total count across all pages."""

    items: list[Article] = Field(default_factory=list)
    per_page: int = Field(default=10, gt=0)
    total: int = 0

    @property
    def total_pages(self) -> int:
        return -(-self.total // self.per_page)

    def replace_item(self, article: Article) -> bool:
        """Swap in an updated article with the same slug.

        Returns:
            True if a matching article was found
        """
        for index, old_article in enumerate(self.items):
            if old_article.slug == article.slug:
                self.items[index] = article
                return True
        return False
