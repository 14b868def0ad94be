"""Section and field names shared by the XML and JSON log formats."""

CREATED_SECTION = "created"
DELETED_SECTION = "deleted"
MODIFIED_SECTION = "modified"
SECTIONS = (CREATED_SECTION, DELETED_SECTION, MODIFIED_SECTION)

OBJECT_TAG = "object"

NAME_FIELD = "name"
OWNER_FIELD = "owner"
CREATION_DATE_FIELD = "creationDate"
MODIFICATION_DATE_FIELD = "modificationDate"
DELETION_DATE_FIELD = "deletionDate"

# Which source field fills LogRecord.date for each section
DATE_FIELD_BY_SECTION = {
    CREATED_SECTION: CREATION_DATE_FIELD,
    DELETED_SECTION: CREATION_DATE_FIELD,
    MODIFIED_SECTION: MODIFICATION_DATE_FIELD,
}

XML_ROOT_TAG = "log"
