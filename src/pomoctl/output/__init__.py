"""Output layer — terminal render surface and the fixed-layout timer screen."""
