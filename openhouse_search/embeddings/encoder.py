from __future__ import annotations

import numpy as np
from sentence_transformers import SentenceTransformer

from .config import DEFAULT_EMBEDDING_CONFIG, EmbeddingConfig

_models: dict[str, SentenceTransformer] = {}


def _get_model(config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG) -> SentenceTransformer:
    model = _models.get(config.model_name)
    if model is None:
        model = SentenceTransformer(config.model_name)
        _models[config.model_name] = model
    return model


def encode_text(text: str, config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG) -> np.ndarray:
    """Encode a single string into a 1-D embedding vector."""
    model = _get_model(config)
    return np.asarray(model.encode(text, show_progress_bar=False), dtype=float)
