# teamledger/filter_config.py
# Central knobs shared by the query builders and the transactions UI.

from teamledger.settings import VAULT_BUCKET

# --------------------------
# Transaction categories (slug -> display label). Slugs are what the
# `category` column stores; a NULL category is shown as "uncategorized".
# --------------------------
CATEGORIES = {
    "travel": "Travel",
    "office_supplies": "Office Supplies",
    "meals": "Meals",
    "software": "Software",
    "rent": "Rent",
    "income": "Income",
    "equipment": "Equipment",
    "salary": "Salary",
    "transfer": "Transfer",
    "internet_and_telephone": "Internet & Telephone",
    "facilities_expenses": "Facilities Expenses",
    "activity": "Activity",
    "uncategorized": "Uncategorized",
    "other": "Other",
}

UNCATEGORIZED = "uncategorized"
TRANSFER_CATEGORY = "transfer"
INCOME_CATEGORY = "income"

# --------------------------
# Transaction status knobs
# --------------------------
# Shown unless the "excluded" status filter is picked
ACTIVE_STATUSES = ["pending", "posted", "completed"]
EXCLUDED_STATUS = "excluded"

# Filter ids as the status checkbox section emits them
STATUS_FULFILLED = "fullfilled"
STATUS_UNFULFILLED = "unfulfilled"
STATUS_EXCLUDED = "excluded"

# Sort keys the table uses that are not real columns
SORT_COLUMN_ALIASES = {
    "attachment": "is_fulfilled",
    "assigned": "assigned_id",
    "bank_account": "bank_account_id",
}

TRANSACTION_COLUMNS = [
    "id",
    "date",
    "amount",
    "currency",
    "category",
    "method",
    "status",
    "note",
    "name:decrypted_name",
    "description:decrypted_description",
    "assigned:assigned_id(*)",
    "bank_account:decrypted_bank_accounts(id, name:decrypted_name, currency, bank_connection:decrypted_bank_connections(id, logo_url))",
    "attachments:transaction_attachments(id, name, size, path, type)",
]

TRANSACTION_DETAIL_COLUMNS = [
    "*",
    "name:decrypted_name",
    "description:decrypted_description",
    "assigned:assigned_id(*)",
    "attachments:transaction_attachments(*)",
    "bank_account:decrypted_bank_accounts(id, name:decrypted_name, currency, bank_connection:decrypted_bank_connections(id, logo_url))",
]

# --------------------------
# Inbox
# --------------------------
INBOX_COLUMNS = [
    "id",
    "file_name",
    "file_path",
    "display_name",
    "transaction_id",
    "amount",
    "currency",
    "content_type",
    "due_date",
    "status",
    "forwarded_to",
    "created_at",
    "website",
    "transaction:decrypted_transactions(id, amount, currency, name:decrypted_name, date)",
]

# Days after arrival an inbox item is still waiting for a match
INBOX_PENDING_DAYS = 45
INBOX_DELETED_STATUS = "deleted"

# --------------------------
# Team / members
# --------------------------
TEAM_MEMBER_COLUMNS = "id, role, team_id, user:users(id, full_name, avatar_url, email)"
INVITE_COLUMNS = "id, email, code, role, user:invited_by(*), team:team_id(*)"

# --------------------------
# Vault (object storage)
# --------------------------
VAULT_BUCKET_NAME = VAULT_BUCKET

# Storage writes this file to keep an otherwise empty folder alive
EMPTY_FOLDER_PLACEHOLDER_FILE_NAME = ".emptyFolderPlaceholder"

# Always shown at the vault root, even before anything is uploaded
DEFAULT_VAULT_FOLDERS = ["exports", "inbox", "imports", "transactions"]

VAULT_PAGE_SIZE = 10000
VAULT_ACTIVITY_LIMIT = 20

# --------------------------
# Tracker
# --------------------------
TRACKER_SORT_ALIASES = {
    "time": "total_duration",
}
