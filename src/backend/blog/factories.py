"""
Blog application factories
"""

from django.utils import timezone

import factory.fuzzy

from blog import models


class AuthorFactory(factory.django.DjangoModelFactory):
    """A factory to create random authors for testing purposes."""

    class Meta:
        model = models.Author

    name = factory.Faker("name")
    email = factory.Faker("email")


class ArticleFactory(factory.django.DjangoModelFactory):
    """A factory to create random articles for testing purposes."""

    class Meta:
        model = models.Article

    author = factory.SubFactory(AuthorFactory)
    title = factory.Faker("sentence", nb_words=5)
    body = factory.Faker("paragraph")
    tags = factory.Faker("words", nb=2)
    is_published = True
    published_at = factory.LazyFunction(timezone.now)
    view_count = factory.fuzzy.FuzzyInteger(0, 1000)
