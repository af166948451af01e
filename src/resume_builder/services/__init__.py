"""Services"""

from resume_builder.services.resume import (
    create_resume,
    delete_resume,
    duplicate_resume,
    get_resume,
    get_resume_stats,
    list_resumes,
    move_resume_entry,
    reorder_resume_section,
    update_resume,
)
from resume_builder.services.sharing import (
    generate_share_link,
    get_shared_resume,
    unpublish,
    update_share_settings,
)
from resume_builder.services.versions import (
    compare_versions,
    get_version_history,
    restore_version,
    save_version,
)

__all__ = [
    "compare_versions",
    "create_resume",
    "delete_resume",
    "duplicate_resume",
    "generate_share_link",
    "get_resume",
    "get_resume_stats",
    "get_shared_resume",
    "get_version_history",
    "list_resumes",
    "move_resume_entry",
    "reorder_resume_section",
    "restore_version",
    "save_version",
    "unpublish",
    "update_resume",
    "update_share_settings",
]
