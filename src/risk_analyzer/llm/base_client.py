"""
Abstract base client for the external analyzer.

The analyzer is an opaque, non-deterministic capability. The pipeline only
depends on this interface, so tests inject deterministic stand-ins and the
retry wrapper decorates any implementation without changing the contract.
"""

from abc import ABC, abstractmethod
import structlog

from risk_analyzer.models.request_models import AnalysisPayload, AnalyzerReply


logger = structlog.get_logger(__name__)


class BaseAnalysisClient(ABC):
    """
    Abstract base class for analyzer clients.
    
    Responsibilities:
    - Send one request per call to the analysis service
    - Extract the raw reply text
    - Map every failure to an AnalyzerClientError subclass
    
    Does NOT handle:
    - Prompt construction (PromptBuilder)
    - Reply parsing and validation (ResponseExtractor)
    - Retries (RetryingAnalysisClient, opt-in)
    """
    
    @abstractmethod
    async def analyze(self, payload: AnalysisPayload) -> AnalyzerReply:
        """
        Send the payload and return the raw reply.
        
        Args:
            payload: Request built by PromptBuilder
            
        Returns:
            AnalyzerReply with the first text content item
            
        Raises:
            AnalyzerNetworkError: Call could not complete
            AnalyzerServiceError: Service reported a non-success status
            AnalyzerEmptyResponseError: No extractable text in the reply
        """
        pass
    
    async def health_check(self) -> bool:
        """
        Check whether the analysis service is reachable.
        
        Must not raise. Default implementation assumes healthy.
        """
        return True
    
    async def close(self):
        """Release connections. Default implementation does nothing."""
        logger.debug("Closing analysis client", client_class=self.__class__.__name__)
    
    async def __aenter__(self):
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
