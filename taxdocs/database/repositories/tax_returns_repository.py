from psycopg.rows import dict_row

from taxdocs.database.connection import get_connection
from taxdocs.documents.exceptions import TaxReturnNotFoundError
from taxdocs.documents.models import TaxReturn


class TaxReturnsRepository:
    """Read access to the tax_returns table."""

    def find_owned(self, tax_return_id: str, user_id: str) -> TaxReturn:
        """Find a tax return that belongs to user_id.

        Raises:
            TaxReturnNotFoundError: if it does not exist or belongs to someone else.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, user_id
                    FROM tax_returns
                    WHERE id = %s AND user_id = %s
                    """,
                    (tax_return_id, user_id),
                )
                row = cur.fetchone()

        if row is None:
            raise TaxReturnNotFoundError(f"Tax return {tax_return_id} not found")

        return TaxReturn(id=str(row["id"]), user_id=str(row["user_id"]))
