"""Exceptions shared by the OCR collaborators and the web layer."""


class OCRFailure(Exception):
    """Text recognition could not be performed on the uploaded file"""


class InvalidUpload(Exception):
    """Uploaded file is missing, empty or of an unsupported type"""
