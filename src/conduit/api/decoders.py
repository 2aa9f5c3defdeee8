"""Wire-format models for API payloads and their conversion to entities."""

import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from conduit.entities import Article, Author, AuthorRelation, Comment, Profile
from conduit.session import Viewer

logger = logging.getLogger(__name__)


class _Wire(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuthorDecoder(_Wire):
    username: str
    bio: str | None = None
    image: str | None = None
    following: bool = False

    def into_author(self, viewer: Viewer | None) -> Author:
        if viewer is not None and viewer.username == self.username:
            relation = AuthorRelation.IS_VIEWER
        elif self.following:
            relation = AuthorRelation.FOLLOWING
        else:
            relation = AuthorRelation.NOT_FOLLOWING
        profile = Profile(username=self.username, bio=self.bio, image=self.image)
        return Author(profile=profile, relation=relation)


class ArticleDecoder(_Wire):
    slug: str
    title: str
    description: str = ""
    body: str = ""
    tag_list: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    favorited: bool = False
    favorites_count: int = 0
    author: AuthorDecoder

    def into_article(self, viewer: Viewer | None) -> Article:
        return Article(
            slug=self.slug,
            title=self.title,
            description=self.description,
            body=self.body,
            tag_list=self.tag_list,
            created_at=self.created_at,
            updated_at=self.updated_at,
            favorited=self.favorited,
            favorites_count=self.favorites_count,
            author=self.author.into_author(viewer),
        )


class CommentDecoder(_Wire):
    id: int | str
    body: str
    created_at: datetime
    updated_at: datetime
    author: AuthorDecoder

    def into_comment(self, viewer: Viewer | None) -> Comment:
        return Comment(
            id=str(self.id),
            body=self.body,
            created_at=self.created_at,
            updated_at=self.updated_at,
            author=self.author.into_author(viewer),
        )


class ViewerDecoder(_Wire):
    username: str
    token: str
    email: str = ""
    bio: str | None = None
    image: str | None = None

    def into_viewer(self) -> Viewer:
        return Viewer(
            username=self.username,
            auth_token=self.token,
            email=self.email,
            bio=self.bio,
            image=self.image,
        )


class ArticleListDecoder(_Wire):
    articles: list[dict[str, Any]] = Field(default_factory=list)
    articles_count: int = 0


def decode_articles(raw_articles: list[dict[str, Any]], viewer: Viewer | None) -> list[Article]:
    """Decode articles one by one, skipping (and logging) malformed entries."""
    articles = []
    for raw in raw_articles:
        try:
            articles.append(ArticleDecoder.model_validate(raw).into_article(viewer))
        except ValidationError as e:
            logger.error(f"Skipping undecodable article: {e}")
    return articles
