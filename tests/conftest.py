import base64

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from health_analyzer.app import app
from health_analyzer.db import get_db, init_db, make_engine
from health_analyzer.routes.analysis import get_vision_analyzer
from health_analyzer.utils.vision_analyzer import VisionResult

IMAGE_B64 = base64.b64encode(b"not-really-a-jpeg").decode("ascii")

DENTAL_TEXT = """
Assessment:
The image shows teeth with some visible issues. The gums appear slightly reddened, which could indicate mild gingivitis. There's visible plaque buildup on the lower front teeth. One tooth appears to have a small cavity forming.

Concerns:
- Mild gingivitis indicated by reddened gums
- Plaque buildup on lower teeth
- Potential early cavity on one tooth
- Some staining visible on several teeth

Recommendations:
- Improve brushing technique, especially on lower front teeth
- Regular flossing to reduce gum inflammation
- Consider a dental checkup to address the potential cavity
- Use a fluoride mouthwash to strengthen enamel

Based on what I can see, I'd give this an oral hygiene score of 6/10. A professional dental cleaning would be beneficial.
"""


class FakeVisionAnalyzer:
    """Stands in for the Gemini adapter and records every call"""

    def __init__(self, result=None):
        self.result = result or VisionResult(text=DENTAL_TEXT, success=True)
        self.calls = []

    async def analyze_image(self, image_base64, prompt):
        self.calls.append((image_base64, prompt))
        return self.result


@pytest.fixture
def engine():
    engine = make_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def vision():
    return FakeVisionAnalyzer()


@pytest.fixture
def client(db_session, vision):
    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_vision_analyzer] = lambda: vision
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
