"""
Small retrieval knowledge bases for the chatbot, one for crops and one for fruits.
Documents are embedded with Gemini the first time they are queried.
"""
import logging

import numpy as np

from ekheti.ai import gemini
from ekheti.errors import KnowledgeBaseError

logger = logging.getLogger(__name__)

CROP_DOCUMENTS = {
    "wheat-guide.txt": "Wheat requires well-drained loamy soil. Optimal temperature for growth is between 15-25°C. Key nutrients are Nitrogen, Phosphorus, and Potassium. Common diseases include Rust and Powdery Mildew. Rust appears as orange pustules on leaves.",
    "rice-faq.txt": "Rice is typically grown in flooded paddies. It is a staple food for a large part of the world's population. It is best to transplant seedlings when they are 25-30 days old. Common pests include stem borer and leafhopper.",
    "fertilizer-info.txt": "Urea is a common nitrogen fertilizer. DAP (Diammonium Phosphate) provides both Nitrogen and Phosphorus. It is crucial to apply fertilizers based on soil test results to avoid overuse and environmental damage.",
}

FRUIT_DOCUMENTS = {
    "mango-guide.txt": "Mango trees thrive in tropical and subtropical climates. They need deep, well-drained soil. Pruning should be done after the fruiting season to encourage new growth. Common pests include mealybugs and fruit flies. Anthracnose is a major fungal disease.",
    "apple-care.txt": "Apple trees require a period of cold dormancy to produce fruit. They are susceptible to Apple Scab, which appears as dark, scabby spots on leaves and fruit. Regular spraying with fungicides may be necessary. Pollination from a different apple variety is often required.",
    "citrus-faq.txt": "Citrus trees need plenty of sunlight and protection from frost. Citrus greening is a devastating bacterial disease with no cure. Regular monitoring for the Asian citrus psyllid, the vector of the disease, is critical. Fertilize with a balanced citrus-specific fertilizer.",
}


class KnowledgeBase:
    def __init__(self, name, documents):
        self.name = name
        self.titles = list(documents)
        self.texts = list(documents.values())
        self.vectors = None

    def index(self):
        """Embed every document once; later calls are no-ops."""
        if self.vectors is None:
            logger.info("Indexing %s knowledge base (%d documents)", self.name, len(self.texts))
            self.vectors = _normalize(np.array(gemini.embed(self.texts, 'retrieval_document'), dtype=float))
        return self.vectors

    def retrieve(self, query, k=3):
        """The k passages closest to the query by cosine similarity."""
        vectors = self.index()
        query_vector = _normalize(np.array(gemini.embed([query], 'retrieval_query'), dtype=float))[0]
        scores = vectors @ query_vector
        ranked = np.argsort(-scores)[:k]
        return [{'title': self.titles[i], 'content': self.texts[i], 'score': float(scores[i])} for i in ranked]


def _normalize(matrix):
    norms = np.linalg.norm(matrix, axis=1, keepdims=True)
    norms[norms == 0] = 1
    return matrix / norms


KNOWLEDGE_BASES = {
    'Crops': KnowledgeBase('Crops', CROP_DOCUMENTS),
    'Fruits': KnowledgeBase('Fruits', FRUIT_DOCUMENTS),
}


def retrieve(query, knowledge_base='Crops', k=3):
    if knowledge_base not in KNOWLEDGE_BASES:
        raise KnowledgeBaseError(f"Unknown knowledge base: {knowledge_base}", status_code=400)
    logger.debug("Retrieving from %s knowledge base for query: %s", knowledge_base, query)
    return KNOWLEDGE_BASES[knowledge_base].retrieve(query, k=k)
