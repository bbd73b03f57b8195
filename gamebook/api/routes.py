"""Game API route definitions."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, HTTPException
from fastapi.responses import JSONResponse

from gamebook.api.dependencies import get_game_service
from gamebook.services.exceptions import GameValidationError
from gamebook.services.game_service import GameService
from gamebook.services.payloads import GameCreatePayload, GameUpdatePayload, ScorePayload

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/games", tags=["games"])

GAME_NOT_FOUND = "Game not found"

# Handlers are plain functions: FastAPI runs them in its threadpool, so
# blocking store calls never stall the event loop.


@router.post("", status_code=201)
def create_game(
    payload: GameCreatePayload,
    service: GameService = Depends(get_game_service),
) -> JSONResponse:
    """Create a scheduled game.

    Returns:
        The stored game with its id (201)
    """
    try:
        game = service.create_game(payload)
        return JSONResponse(status_code=201, content=game.to_response())
    except GameValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f"Error creating game: {e}")
        raise HTTPException(status_code=500, detail="Failed to create game")


@router.get("")
def list_games(
    team_id: Optional[str] = Query(default=None, alias="teamId", description="Team ID filter"),
    game_type: Optional[str] = Query(default=None, alias="type", description="Game type filter"),
    service: GameService = Depends(get_game_service),
) -> JSONResponse:
    """List games, newest first.

    Args:
        team_id: Only games of this team
        game_type: Only games of this type (case-insensitive)

    Returns:
        List of games
    """
    try:
        games = service.list_games(team_id=team_id, game_type=game_type)
        return JSONResponse(content=[game.to_response() for game in games])
    except GameValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f"Error fetching games: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve games")


@router.get("/{game_id}")
def get_game(
    game_id: str,
    service: GameService = Depends(get_game_service),
) -> JSONResponse:
    """Get a single game."""
    try:
        game = service.get_game(game_id)
    except Exception as e:
        logger.error(f"Error fetching game {game_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve game")

    if game is None:
        raise HTTPException(status_code=404, detail=GAME_NOT_FOUND)
    return JSONResponse(content=game.to_response())


@router.put("/{game_id}/score")
def update_score(
    game_id: str,
    payload: ScorePayload,
    service: GameService = Depends(get_game_service),
) -> JSONResponse:
    """Record the live score; the game becomes in-progress."""
    try:
        game = service.update_score(game_id, payload.us, payload.them)
    except GameValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f"Error updating score for game {game_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update score")

    if game is None:
        raise HTTPException(status_code=404, detail=GAME_NOT_FOUND)
    return JSONResponse(content=game.to_response())


@router.put("/{game_id}/finish")
def finish_game(
    game_id: str,
    payload: ScorePayload,
    service: GameService = Depends(get_game_service),
) -> JSONResponse:
    """Finish a game with its final score.

    Returns:
        Confirmation message and the finished game
    """
    try:
        game = service.finish_game(game_id, payload.us, payload.them)
    except GameValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f"Error finishing game {game_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to finish game")

    if game is None:
        raise HTTPException(status_code=404, detail=GAME_NOT_FOUND)
    return JSONResponse(
        content={
            "message": "Game finished and saved to history",
            "game": game.to_response(),
        }
    )


@router.put("/{game_id}")
def update_game_info(
    game_id: str,
    payload: GameUpdatePayload,
    service: GameService = Depends(get_game_service),
) -> JSONResponse:
    """Update game type, date, lineup or opponent (partial)."""
    try:
        game = service.update_game_info(game_id, payload)
    except GameValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f"Error updating game info for {game_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update game info")

    if game is None:
        raise HTTPException(status_code=404, detail=GAME_NOT_FOUND)
    return JSONResponse(content=game.to_response())


@router.delete("/{game_id}")
def delete_game(
    game_id: str,
    service: GameService = Depends(get_game_service),
) -> JSONResponse:
    """Delete a single game."""
    try:
        deleted = service.delete_game(game_id)
    except Exception as e:
        logger.error(f"Error deleting game {game_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete game")

    if not deleted:
        raise HTTPException(status_code=404, detail=GAME_NOT_FOUND)
    return JSONResponse(content={"message": "Game deleted successfully"})


@router.delete("")
def delete_games(
    team_id: Optional[str] = Query(default=None, alias="teamId", description="Team ID filter"),
    service: GameService = Depends(get_game_service),
) -> JSONResponse:
    """Delete all games, or all games of one team."""
    try:
        service.delete_games(team_id=team_id)
        return JSONResponse(content={"message": "Games deleted successfully"})
    except Exception as e:
        logger.error(f"Error deleting games: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete games")
