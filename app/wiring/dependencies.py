import logging

from app.core.config import settings
from app.application.use_cases.create_question import CreateQuestionUseCase
from app.application.use_cases.evaluate_answer import EvaluateAnswerUseCase
from app.application.use_cases.submit_answer import SubmitAnswerUseCase
from app.infrastructure.store.json_store import JsonRecordStore
from app.infrastructure.store.memory_store import MemoryRecordStore
from app.infrastructure.supabase.rest_store import SupabaseRecordStore


logger = logging.getLogger(__name__)

RecordStore = MemoryRecordStore | JsonRecordStore | SupabaseRecordStore

_record_store: RecordStore | None = None


def get_record_store() -> RecordStore:
    global _record_store
    if _record_store is None:
        provider = settings.STORE_PROVIDER.lower()
        if provider == "supabase":
            _record_store = SupabaseRecordStore()
        elif provider == "json":
            _record_store = JsonRecordStore(data_dir=settings.DATA_DIR)
        elif provider == "memory":
            _record_store = MemoryRecordStore()
        else:
            raise ValueError(f"Unknown STORE_PROVIDER: {settings.STORE_PROVIDER!r}")
        logger.info("Record store ready: %s", type(_record_store).__name__)
    return _record_store


def get_evaluate_answer_use_case() -> EvaluateAnswerUseCase:
    store = get_record_store()
    return EvaluateAnswerUseCase(questions=store, responses=store)


def get_submit_answer_use_case() -> SubmitAnswerUseCase:
    store = get_record_store()
    return SubmitAnswerUseCase(
        questions=store,
        responses=store,
        evaluator=EvaluateAnswerUseCase(questions=store, responses=store),
    )


def get_create_question_use_case() -> CreateQuestionUseCase:
    return CreateQuestionUseCase(questions=get_record_store())
