from services.datastore.client import SupabaseClient, get_supabase_client
from services.datastore.resumes import ResumeRepository

__all__ = [
    "SupabaseClient",
    "get_supabase_client",
    "ResumeRepository",
]
