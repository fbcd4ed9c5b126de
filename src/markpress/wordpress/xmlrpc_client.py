"""Client for the WordPress XML-RPC API (``/xmlrpc.php``)."""

import logging
import ssl
import xmlrpc.client
from functools import reduce
from typing import Any

from ..exceptions import MarkpressAuthenticationError, WordPressApiError
from .config import WordPressConfig
from .constants import DEFAULT_PER_PAGE

logger = logging.getLogger("markpress.wordpress")

# XML-RPC fault codes WordPress uses for bad credentials / missing capabilities
AUTH_FAULT_CODES = (401, 403)


class WordPressXmlRpcClient:
    """Calls ``wp.*`` methods with the configured blog id and credentials."""

    def __init__(
        self,
        config: WordPressConfig | None = None,
        server: Any | None = None,
    ) -> None:
        """Initialize the XML-RPC client.

        Args:
            config: Optional configuration object (will use env vars if not provided)
            server: Optional server proxy; defaults to a ``ServerProxy`` for the site
        """
        self.config = config or WordPressConfig.from_env()
        self.server = server or xmlrpc.client.ServerProxy(
            self.config.xmlrpc_url,
            allow_none=True,
            use_datetime=True,
            context=self._ssl_context(),
        )
        logger.debug(f"Initialized WordPress XML-RPC client. URL: {self.config.xmlrpc_url}")

    def _ssl_context(self) -> ssl.SSLContext | None:
        if self.config.ssl_verify:
            return None
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        return context

    def _call(self, method: str, *args: Any) -> Any:
        """
        Call ``method`` with the blog id and credentials prepended to ``args``.

        Raises:
            MarkpressAuthenticationError: If WordPress rejects the credentials
            WordPressApiError: If the call faults
        """
        call = reduce(getattr, method.split("."), self.server)
        try:
            result = call(
                self.config.blog_id, self.config.username, self.config.password, *args
            )
        except xmlrpc.client.Fault as fault:
            logger.error(f"{method} fault {fault.faultCode}: {fault.faultString}")
            error_cls = (
                MarkpressAuthenticationError
                if fault.faultCode in AUTH_FAULT_CODES
                else WordPressApiError
            )
            raise error_cls(
                f"WordPress {method} failed! {fault.faultString}",
                status_code=fault.faultCode,
            ) from fault
        except xmlrpc.client.ProtocolError as e:
            logger.error(f"{method} protocol error {e.errcode}: {e.errmsg}")
            raise WordPressApiError(
                f"WordPress {method} failed! {e.errmsg}", status_code=e.errcode
            ) from e
        except OSError as e:
            logger.error(f"Network error during {method}: {e}")
            raise WordPressApiError(f"WordPress {method} failed! {e}") from e

        return result

    def send_message(self, method: str, *args: Any) -> Any:
        """Like ``_call``, but a falsy result also raises WordPressApiError."""
        result = self._call(method, *args)
        if not result:
            raise WordPressApiError(f"WordPress {method} failed!")
        return result

    def get_posts(
        self, post_type: str, per_page: int = DEFAULT_PER_PAGE
    ) -> list[dict[str, Any]]:
        """Fetch every post of ``post_type``, paging with ``offset`` until a short page."""
        posts: list[dict[str, Any]] = []
        offset = 0
        while True:
            page = self._call(
                "wp.getPosts",
                {"post_type": post_type, "number": per_page, "offset": offset},
            )
            posts.extend(page)
            if len(page) < per_page:
                return posts
            offset += per_page

    def new_post(self, content: dict[str, Any]) -> str:
        return self.send_message("wp.newPost", content)

    def edit_post(self, post_id: int, content: dict[str, Any]) -> bool:
        return self.send_message("wp.editPost", post_id, content)

    def delete_post(self, post_id: int) -> bool:
        return self.send_message("wp.deletePost", post_id)
