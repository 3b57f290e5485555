"""
YouTube video endpoints.

A missing thumbnail is filled in from the video URL. On update, a thumbnail
that was derived from the old URL follows the URL change; a custom one is kept.
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from portfolio.api.deps import get_repository, parse_id, require_admin
from portfolio.db import schemas
from portfolio.db.repositories.base import ContentRepository
from portfolio.utils.youtube import derive_thumbnail_url

router = APIRouter(prefix="/api/youtube-videos", tags=["youtube videos"])


def _resolve_thumbnail(changes: Dict[str, Any], existing: schemas.YoutubeVideo) -> Dict[str, Any]:
    if "thumbnail_url" in changes:
        if not changes["thumbnail_url"]:
            changes["thumbnail_url"] = derive_thumbnail_url(changes.get("video_url") or existing.video_url)
        return changes
    if "video_url" in changes:
        current = existing.thumbnail_url
        if not current or current == derive_thumbnail_url(existing.video_url):
            changes["thumbnail_url"] = derive_thumbnail_url(changes["video_url"])
    return changes


@router.get("", response_model=List[schemas.YoutubeVideo])
def list_youtube_videos(repo: ContentRepository = Depends(get_repository)):
    return repo.list_youtube_videos()


@router.get("/{video_id}", response_model=schemas.YoutubeVideo)
def get_youtube_video(video_id: str, repo: ContentRepository = Depends(get_repository)):
    video = repo.get_youtube_video(parse_id(video_id, "video"))
    if video is None:
        raise HTTPException(status_code=404, detail="Video not found")
    return video


@router.post("", response_model=schemas.YoutubeVideo, status_code=status.HTTP_201_CREATED)
def create_youtube_video(
    video: schemas.YoutubeVideoCreate,
    repo: ContentRepository = Depends(get_repository),
    _admin: schemas.User = Depends(require_admin),
):
    if not video.thumbnail_url:
        video = video.model_copy(update={"thumbnail_url": derive_thumbnail_url(video.video_url)})
    return repo.create_youtube_video(video)


@router.put("/{video_id}", response_model=schemas.YoutubeVideo)
def update_youtube_video(
    video_id: str,
    payload: schemas.YoutubeVideoUpdate,
    repo: ContentRepository = Depends(get_repository),
    _admin: schemas.User = Depends(require_admin),
):
    item_id = parse_id(video_id, "video")
    changes = payload.changes()
    if "video_url" in changes or "thumbnail_url" in changes:
        existing = repo.get_youtube_video(item_id)
        if existing is None:
            raise HTTPException(status_code=404, detail="Video not found")
        changes = _resolve_thumbnail(changes, existing)
    updated = repo.update_youtube_video(item_id, changes)
    if updated is None:
        raise HTTPException(status_code=404, detail="Video not found")
    return updated


@router.delete("/{video_id}")
def delete_youtube_video(
    video_id: str,
    repo: ContentRepository = Depends(get_repository),
    _admin: schemas.User = Depends(require_admin),
):
    if not repo.delete_youtube_video(parse_id(video_id, "video")):
        raise HTTPException(status_code=404, detail="Video not found")
    return {"message": "Video deleted successfully"}
