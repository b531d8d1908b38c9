"""Errors raised while decoding a statement."""


class PDFParseError(Exception):
  """The PDF could not be decoded or its text could not be extracted."""


class PasswordError(PDFParseError):
  """The statement is encrypted and the given password did not open it."""
