"""Test data factories."""

from tests.factories.article import ArticleFactory


__all__ = ["ArticleFactory"]
