"""
Core types for vocabulary parsing and counting.
"""

type Piece = str
type Score = float
type PieceId = int
type FieldNumber = int
type Tag = tuple[FieldNumber, int]
