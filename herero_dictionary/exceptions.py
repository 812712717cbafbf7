from fastapi import HTTPException, status

class AppException(HTTPException):
    """Base exception for application errors"""
    pass

class DatabaseException(AppException):
    def __init__(self, detail: str = "A database error occurred"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail
        )

