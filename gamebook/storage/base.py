"""
Abstract base class defining the game document store interface.

All storage backends must inherit from this class and implement every
abstract method. Documents are plain dictionaries in the camelCase wire
form of a Game (see gamebook.models.game); the store assigns the 'id'
key on creation and never interprets it otherwise.
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any


class GameStoreInterface(ABC):
    """
    Abstract interface for game document storage.

    Mirrors the small subset of a document database the game service
    relies on: create, filtered listing sorted by game date, lookup,
    single-document update/delete and bulk delete.
    """

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    @abstractmethod
    def initialize(self) -> None:
        """
        Initialize the connection and the games collection.

        Should be idempotent (safe to call multiple times).
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Close connections and clean up resources."""
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """
        Check if the store is reachable.

        Returns:
            True if the store is accessible, False otherwise
        """
        pass

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a new game document.

        Args:
            data: Normalized game document without an 'id'

        Returns:
            The stored document including its newly assigned 'id'
        """
        pass

    @abstractmethod
    def find_by_id_and_update(
        self,
        game_id: str,
        update: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Apply a partial update to one document.

        Args:
            game_id: Document identifier
            update: Fields to set. Dotted keys ('opponent.teamName')
                    set a nested field without replacing its parent.

        Returns:
            The updated document, or None if no document has this id

        Behavior:
            - The read-modify-write is atomic per document
            - Concurrent updates are last-write-wins
        """
        pass

    @abstractmethod
    def find_by_id_and_delete(self, game_id: str) -> Optional[Dict[str, Any]]:
        """
        Delete one document.

        Returns:
            The deleted document, or None if no document has this id
        """
        pass

    @abstractmethod
    def delete_many(self, filters: Dict[str, Any]) -> int:
        """
        Delete every document matching the filter.

        An empty filter deletes all games.

        Returns:
            Number of documents deleted
        """
        pass

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    @abstractmethod
    def find_many(self, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Get documents matching the filter.

        Args:
            filters: Exact-match conditions combined with AND logic.
                    Supported keys: 'teamId', 'gameType'.

        Returns:
            Matching documents ordered by gameDate descending (newest first)
        """
        pass

    @abstractmethod
    def find_by_id(self, game_id: str) -> Optional[Dict[str, Any]]:
        """
        Get one document by identifier.

        Returns:
            The document, or None if not found
        """
        pass
