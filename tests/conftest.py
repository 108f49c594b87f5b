import matplotlib
import pandas as pd
import pytest

matplotlib.use("Agg")

from linkedin_insights.data_prep import prepare_posts  # noqa: E402

NOW = pd.Timestamp("2024-06-15T12:00:00Z")


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def raw_posts():
    """Five rows in the enhanced export layout, one of them mostly blank."""
    return pd.DataFrame([
        {"text": "Proud to share our milestone #growth", "authorName": "Asha",
         "postedAtISO": "2024-06-14T09:00:00Z", "Likes": 150, "Comments": 10, "Shares": 5},
        {"text": "Shoffr ride was terrible, driver was rude and late. Cancelled twice!", "authorName": "Ravi",
         "postedAtISO": "2024-06-13T08:00:00Z", "Likes": 3, "Comments": 2, "Shares": 0},
        {"text": "We are hiring a driver, join our team", "authorName": "Shoffr",
         "postedAtISO": "2024-06-12T10:00:00Z", "Likes": 40, "Comments": 4, "Shares": 1},
        {"text": "Great experience with Shoffr, the car was clean and the driver professional",
         "authorName": "Meera", "postedAtISO": "2024-06-14T18:30:00Z", "Likes": 80, "Comments": 6, "Shares": 2},
        {"text": "", "authorName": None, "postedAtISO": None, "Likes": "n/a", "Comments": None, "Shares": 0},
    ])


@pytest.fixture
def posts(raw_posts, now):
    return prepare_posts(raw_posts, now=now)
