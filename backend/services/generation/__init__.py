from services.generation.json_parsing import parse_reply, strip_code_fences, extract_outer_json
from services.generation.resume import ResumeContentGenerator, JobContext
from services.generation.ats import ATSAnalyzer
from services.generation.cover_letter import CoverLetterGenerator

__all__ = [
    "parse_reply",
    "strip_code_fences",
    "extract_outer_json",
    "ResumeContentGenerator",
    "JobContext",
    "ATSAnalyzer",
    "CoverLetterGenerator",
]
