"""
Ideaboard – SQLAlchemy ORM models package.

Imports all model classes so the app can discover them through a single
``from ideaboard.models import *`` import before ``create_all`` runs.
"""

from ideaboard.models.user import User                           # noqa: F401
from ideaboard.models.session import Session                     # noqa: F401
from ideaboard.models.business_idea import BusinessIdea, IdeaStatus  # noqa: F401
