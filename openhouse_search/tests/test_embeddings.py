from unittest.mock import MagicMock, patch

import numpy as np

from openhouse_search.embeddings import encoder
from openhouse_search.embeddings.config import EmbeddingConfig
from openhouse_search.embeddings.encoder import encode_text


@patch.dict(encoder._models, clear=True)
@patch("openhouse_search.embeddings.encoder.SentenceTransformer")
def test_encode_text_loads_model_once(mock_st_cls):
    mock_st_cls.return_value.encode.return_value = np.ones(384, dtype=np.float32)
    config = EmbeddingConfig(model_name="test-model")

    first = encode_text("Licence Informatique", config)
    second = encode_text("Master Droit", config)

    mock_st_cls.assert_called_once_with("test-model")
    assert first.shape == (384,)
    assert first.dtype == float
    assert np.array_equal(first, second)


@patch.dict(encoder._models, clear=True)
@patch("openhouse_search.embeddings.encoder.SentenceTransformer")
def test_encode_text_loads_one_model_per_name(mock_st_cls):
    small, large = MagicMock(), MagicMock()
    small.encode.return_value = [0.0, 1.0]
    large.encode.return_value = [1.0, 0.0, 0.5]
    mock_st_cls.side_effect = [small, large]

    vec_small = encode_text("droit", EmbeddingConfig(model_name="small"))
    vec_large = encode_text("droit", EmbeddingConfig(model_name="large"))
    vec_small_again = encode_text("droit", EmbeddingConfig(model_name="small"))

    assert vec_small.tolist() == [0.0, 1.0]
    assert vec_large.tolist() == [1.0, 0.0, 0.5]
    assert vec_small_again.tolist() == [0.0, 1.0]
    assert mock_st_cls.call_count == 2


def test_encode_text_uses_loaded_model():
    model = MagicMock()
    model.encode.return_value = [0.1, 0.2]
    config = EmbeddingConfig(model_name="preloaded")

    with patch.dict(encoder._models, {"preloaded": model}, clear=True):
        vec = encode_text("BTS commerce", config)

    model.encode.assert_called_once_with("BTS commerce", show_progress_bar=False)
    assert vec.tolist() == [0.1, 0.2]
