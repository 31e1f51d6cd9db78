"""Account management endpoints"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from app import config
from app.infra.supabase import get_repositories
from app.infra.supabase.repositories import RepositoryFactory
from app.middleware.auth import get_current_user_id
from app.services.account_service import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/account", tags=["account"])


@router.delete("")
async def delete_account(
    response: Response,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
):
    """Delete the account and all todos, events and calendar tasks it owns"""
    service = AccountService(repos)
    try:
        deleted = await service.delete_account(user_id)
    except Exception as e:
        logger.error(f"Failed to delete account {user_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to delete account: {str(e)}")

    if not deleted:
        raise HTTPException(status_code=404, detail="User not found")

    response.delete_cookie(key=config.SESSION_COOKIE_NAME, path="/")
    return {"success": True, "message": "Account deleted successfully"}
