from .base import CamelModel


class DashboardStats(CamelModel):
    project_count: int
    blog_post_count: int
    video_count: int
    unread_contact_count: int
