# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-14
# Description: OpenAIEmbedder
# -----------------------------------------------------------------------------
import time
from typing import Any, Optional

import numpy as np
from openai import OpenAI, OpenAIError

from config.Config import Config
from errors.RecommendationErrors import DimensionMismatch, ProviderError
from settings import EMBEDDING_DIM
from utility.logging_utils import get_class_logger


class OpenAIEmbedder:
    """
    Turns one piece of text into one embedding vector using the OpenAI
    embeddings endpoint.

    No retries: every SDK failure is raised as ProviderError and the
    caller decides whether to retry or fall back. A vector of the wrong
    length means the model changed under the anchors and raises
    DimensionMismatch instead.
    """

    HEALTHCHECK_TEXT = "finance tracker embedding healthcheck"

    def __init__(
            self,
            cfg: Config,
            *,
            dimension: int = EMBEDDING_DIM,
            client: Optional[Any] = None,
            logger=None,
    ):
        self.cfg = cfg
        self.dimension = dimension
        self.logger = logger or get_class_logger(self.__class__)

        self.client = client or OpenAI(
            api_key=cfg.openai_api_key,
            base_url=cfg.openai_base_url,
        )
        self.model = cfg.openai_embed_model or "text-embedding-3-small"
        self.logger.info("OpenAI Embedder initialised (model=%s, dimension=%d)", self.model, self.dimension)

    def embed(self, text: str) -> np.ndarray:
        """
        Embed a single string. Returns a read-only float32 vector of
        length self.dimension.
        """
        self.logger.debug("Embedding text (len=%d) with model=%s", len(text or ""), self.model)

        try:
            resp = self.client.embeddings.create(
                model=self.model,
                input=text,
                encoding_format="float",
            )
        except OpenAIError as e:
            self.logger.warning("Embedding request failed: %s", e)
            raise ProviderError(f"Embedding request failed: {e}") from e

        data = getattr(resp, "data", None) or []
        embedding = getattr(data[0], "embedding", None) if data else None
        if not embedding:
            raise ProviderError("No embedding data returned in response")

        if len(embedding) != self.dimension:
            self.logger.error(
                "Unexpected embedding dimensions: expected %d, got %d (model=%s)",
                self.dimension,
                len(embedding),
                self.model,
            )
            raise DimensionMismatch(self.dimension, len(embedding))

        vec = np.asarray(embedding, dtype=np.float32)
        vec.setflags(write=False)
        return vec

    def healthcheck(self) -> bool:
        try:
            start = time.time()
            _ = self.embed(self.HEALTHCHECK_TEXT)
            elapsed_ms = (time.time() - start) * 1000.0
            self.logger.info("Embedding healthcheck PASSED in %.1f ms", elapsed_ms)
            return True
        except (ProviderError, DimensionMismatch) as e:
            self.logger.warning("Embedding healthcheck FAILED: %s", e)
            return False
