"""Shared stored-document fixtures for core unit tests"""

import copy

import pytest


LEGACY_DISEASE = {
    "_id": "65f0c0ffee",
    "title": "Rhinite allergique",
    "type": "maladie",
    "patientSituation": "Une patiente se présente au comptoir.",
    "keyQuestions": ["Depuis quand ?", "Autres symptômes ?"],
    "pathologyOverview": {"content": "Inflammation de la muqueuse nasale."},
    "redFlags": [{"type": "text", "value": "Fièvre élevée"}],
    "recommendations": {
        "mainTreatment": ["Antihistaminique oral"],
        "associatedProducts": [],
        "lifestyleAdvice": ["Aérer le logement"],
        "dietaryAdvice": [],
    },
    "references": ["Vidal 2024"],
    "customSections": [{"title": "Focus pollen", "content": "Calendrier pollinique"}],
    "quiz": [{"question": "Q?", "options": ["a", "b"], "correctAnswerIndex": 0, "explanation": ""}],
}

LEGACY_KNOWLEDGE = {
    "title": "Le sommeil",
    "type": "savoir",
    "memoSections": [
        {"id": "memo-intro", "title": "Introduction", "content": "- **Sommeil** : cycle"},
        {"title": "Conseils", "content": [{"type": "image", "value": "https://example.org/s.png"}]},
    ],
    "references": "HAS 2023",
}


@pytest.fixture(name="legacy_disease")
def legacy_disease_fixture():
    return copy.deepcopy(LEGACY_DISEASE)


@pytest.fixture(name="legacy_knowledge")
def legacy_knowledge_fixture():
    return copy.deepcopy(LEGACY_KNOWLEDGE)
