"""Consistency and field validation for FundsXML fund reports."""
from fundsxml_checker.application.use_cases import EvaluateDocumentUseCase, EvaluationContext
from fundsxml_checker.domain.services import FieldEvaluator
from fundsxml_checker.infrastructure.parsing.fundsxml import FundsXmlParseError, parse_fundsxml
from fundsxml_checker.infrastructure.repositories.xml_repositories import FundsXmlDocumentRepository

__all__ = [
    "EvaluateDocumentUseCase",
    "EvaluationContext",
    "FieldEvaluator",
    "FundsXmlDocumentRepository",
    "FundsXmlParseError",
    "parse_fundsxml",
]
