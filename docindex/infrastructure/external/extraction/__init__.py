from docindex.infrastructure.external.extraction.text_extractor import TextExtractor

__all__ = ["TextExtractor"]
