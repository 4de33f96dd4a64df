from __future__ import annotations
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from dotenv import load_dotenv
BASE_DIR = Path(__file__).parent.resolve()
sys.path.insert(0, str(BASE_DIR))
from thracker.api.schemas import CopilotResponse
from thracker.config import Settings
from thracker.graph.workflow import run_application_copilot
from thracker.llm_provider import PROVIDERS, get_llm
from thracker.state import AgentSettings, JobDetails
from thracker.utils import load_text


def main():
    load_dotenv()  # load .env if exists
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    parser = argparse.ArgumentParser(description="Application Copilot: score a resume, suggest edits, draft a cover letter")
    parser.add_argument("--resume", required=True, help="Path to resume (.txt, .md or .pdf)")
    parser.add_argument("--job", required=True, help="Path to the job description (.txt, .md or .pdf)")
    parser.add_argument("--position", required=True, help="Job title, e.g. 'Senior Data Engineer'")
    parser.add_argument("--company", required=True, help="Company name")
    parser.add_argument("--location", default=None)
    parser.add_argument("--industry", default=None)
    parser.add_argument("--base-cover-letter", default=None, help="Optional cover letter to adapt instead of writing from scratch")
    parser.add_argument("--tone", default="professional")
    parser.add_argument("--focus", default="technical", help="Focus area")
    parser.add_argument("--detail", default="balanced", help="Detail level")
    parser.add_argument("--provider", default=None, choices=sorted(PROVIDERS), help="LLM provider selection (default: LLM_PROVIDER or auto)")
    parser.add_argument("--out", default="copilot.json", help="Output JSON path")
    args = parser.parse_args()

    settings = Settings.from_env()
    if args.provider:
        settings.llm_provider = args.provider

    base_letter = load_text(args.base_cover_letter) if args.base_cover_letter else None
    result = asyncio.run(run_application_copilot(
        load_text(args.resume),
        base_letter,
        load_text(args.job),
        JobDetails(position=args.position, company=args.company, location=args.location, industry=args.industry),
        AgentSettings(tone=args.tone, focus_area=args.focus, detail_level=args.detail),
        llm=get_llm(settings),
        stage_timeout_s=settings.stage_timeout_s,
    ))

    if result.error:
        print("[WARN] Pipeline completed with errors:")
        print(" -", result.error)

    out_path = Path(args.out)
    payload = CopilotResponse.from_result(result).model_dump(by_alias=True)
    out_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"[OK] Compatibility score: {result.compatibility_score:g}")
    print(f"[OK] Result written to: {out_path.resolve()}")


if __name__ == "__main__":
    main()
