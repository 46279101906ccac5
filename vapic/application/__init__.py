"""Application layer: versioned cache services and result DTOs."""
