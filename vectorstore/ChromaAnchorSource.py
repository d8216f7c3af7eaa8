# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-16
# Description: ChromaAnchorSource
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import chromadb
from chromadb import ClientAPI
from chromadb.api.models import Collection

from config.Config import Config
from errors.RecommendationErrors import StoreUnavailable
from utility.logging_utils import get_class_logger
from vectorstore.AnchorSource import AnchorSource
from vectorstore.CategoryAnchor import CategoryAnchor


@dataclass
class ChromaAnchorSource(AnchorSource):
    """
    Category anchors kept in a Chroma collection.

    Each record: id = str(anchor_id), document = label,
    metadata = {"label", "anchor_id"}, embedding = anchor vector.
    Similarity is computed by CategoryVectorStore, so the collection is only
    used as durable storage with a full-table read.
    """
    cfg: Config
    collection_name: Optional[str] = None
    client: Optional[ClientAPI] = None
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)
        self.collection_name = self.collection_name or self.cfg.chroma_collection

        if self.client is None:
            self.logger.info("Initialising Chroma persistent client (path=%s)", self.cfg.chroma_path)
            self.client = chromadb.PersistentClient(path=self.cfg.chroma_path)

        self.collection: Collection = self.client.get_or_create_collection(
            name=self.collection_name,
            metadata={"description": "Category anchors for transaction recommendations"},
        )
        self.logger.info("Chroma collection ready: '%s'", self.collection_name)

    def test_connection(self) -> bool:
        """
        Simple health check: can we talk to Chroma and our collection?
        """
        try:
            _ = self.collection.count()
            return True
        except Exception as e:
            self.logger.error("Chroma connection failed: %s", e)
            return False

    def count(self) -> int:
        try:
            return self.collection.count()
        except Exception as e:
            self.logger.error("Failed to count Chroma collection '%s': %s", self.collection_name, e)
            raise StoreUnavailable(f"Cannot count anchors in '{self.collection_name}': {e}") from e

    def load_anchors(self) -> List[CategoryAnchor]:
        self.logger.debug("Loading all anchors from collection '%s'", self.collection_name)

        try:
            res: Dict[str, Any] = self.collection.get(include=["embeddings", "documents", "metadatas"])
        except Exception as e:
            self.logger.error(
                "Failed to read anchors from collection '%s': %s",
                self.collection_name,
                e,
                exc_info=True,
            )
            raise StoreUnavailable(f"Cannot read anchors from '{self.collection_name}': {e}") from e

        ids: List[str] = res.get("ids") or []
        # embeddings may come back as a 2-D numpy array; avoid truthiness checks on it
        embeddings = res.get("embeddings")
        if embeddings is None:
            embeddings = []
        documents = res.get("documents") or [None] * len(ids)
        metadatas = res.get("metadatas") or [None] * len(ids)

        if len(embeddings) != len(ids):
            raise StoreUnavailable(
                f"Collection '{self.collection_name}' returned {len(ids)} ids but {len(embeddings)} embeddings"
            )

        anchors: List[CategoryAnchor] = []
        for chroma_id, vec, doc, md in zip(ids, embeddings, documents, metadatas):
            md = md if isinstance(md, dict) else {}
            anchors.append(CategoryAnchor(
                anchor_id=md.get("anchor_id", chroma_id),
                label=md.get("label") or doc or "",
                embedding=vec,
            ))

        self.logger.info("Loaded %d anchors from collection '%s'", len(anchors), self.collection_name)
        return anchors

    def add_anchors(self, anchors: Sequence[CategoryAnchor]) -> int:
        if not anchors:
            return 0

        ids: List[str] = []
        documents: List[str] = []
        embeddings: List[List[float]] = []
        metadatas: List[Dict[str, Any]] = []

        for a in anchors:
            ids.append(str(a.anchor_id))
            documents.append(a.label)
            embeddings.append(a.embedding.tolist())
            metadatas.append({"label": a.label, "anchor_id": a.anchor_id})

        try:
            self.collection.upsert(
                ids=ids,
                documents=documents,
                embeddings=embeddings,
                metadatas=metadatas,
            )
        except Exception as e:
            self.logger.error("Failed to upsert %d anchors into '%s': %s", len(ids), self.collection_name, e)
            raise StoreUnavailable(f"Cannot write anchors to '{self.collection_name}': {e}") from e

        self.logger.info(
            "Upserted %d anchors into Chroma collection '%s'",
            len(ids),
            self.collection_name,
        )
        return len(ids)
