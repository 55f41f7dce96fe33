USERS_COLLECTION_NAME = 'users'
LOCATIONS_COLLECTION_NAME = 'locations'
