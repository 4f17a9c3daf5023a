"""GraphQL documents for the portal data API."""

PROPERTY_FIELDS = """
      id
      title
      description
      price
      address
      city
      state
      zipCode
      bedrooms
      bathrooms
      squareFeet
      propertyType
      listingType
      images
      submittedBy
      submittedAt
      updatedAt
      status
      contactName
      contactEmail
      contactPhone
      amenities
      yearBuilt
      lotSize
      parkingSpaces
      isPublic
"""

# Lists also return signed image URLs
PROPERTY_LIST_FIELDS = PROPERTY_FIELDS + "      imageUrls\n"

PENDING_PROPERTY_FIELDS = """
        id
        title
        description
        price
        address
        city
        state
        zipCode
        bedrooms
        bathrooms
        squareFeet
        propertyType
        listingType
        images
        status
        submittedAt
        submittedBy
        contactName
        contactEmail
        contactPhone
"""

MODERATION_RESULT_FIELDS = """
      id
      title
      status
      updatedAt
"""

# -- mutations -------------------------------------------------------------

CREATE_PROPERTY = """
  mutation CreateProperty($input: CreatePropertyInput!) {
    createProperty(input: $input) {
      propertyId
      message
      queueMessageId
    }
  }
"""

UPDATE_PROPERTY = f"""
  mutation UpdateProperty($input: UpdatePropertyInput!) {{
    updateProperty(input: $input) {{{PROPERTY_FIELDS}    }}
  }}
"""

DELETE_PROPERTY = """
  mutation DeleteProperty($id: ID!) {
    deleteProperty(id: $id) {
      id
    }
  }
"""

GET_UPLOAD_URL = """
  mutation GetUploadUrl($fileName: String!, $contentType: String!) {
    getUploadUrl(fileName: $fileName, contentType: $contentType) {
      uploadUrl
      fileKey
    }
  }
"""

UPGRADE_USER_TO_PAID = """
  mutation UpgradeUserToPaid($cognitoUserId: String!) {
    upgradeUserToPaid(cognitoUserId: $cognitoUserId) {
      success
      message
      executionArn
    }
  }
"""

GENERATE_PROPERTY_REPORT = """
  mutation GeneratePropertyReport($input: GenerateReportInput!) {
    generatePropertyReport(input: $input) {
      reportId
      reportType
      generatedAt
      content
      propertyTitle
      executiveSummary
      marketInsights
      recommendations
      metadata {
        modelUsed
        generationTimeMs
        wordCount
      }
      signedUrl
      s3Key
      executionArn
    }
  }
"""

APPROVE_PROPERTY = f"""
  mutation ApproveProperty($id: ID!) {{
    approveProperty(id: $id) {{{MODERATION_RESULT_FIELDS}    }}
  }}
"""

REJECT_PROPERTY = f"""
  mutation RejectProperty($id: ID!, $reason: String!) {{
    rejectProperty(id: $id, reason: $reason) {{{MODERATION_RESULT_FIELDS}    }}
  }}
"""

# -- queries -----------------------------------------------------------------

GET_USER_DETAILS = """
  query GetUserDetails($cognitoUserId: String!) {
    getUserDetails(cognitoUserId: $cognitoUserId) {
      userId
      cognitoUserId
      email
      firstName
      lastName
      contactNumber
      createdAt
      tier
    }
  }
"""

LIST_MY_PROPERTIES = f"""
  query ListMyProperties($userId: String!, $limit: Int, $nextToken: String) {{
    listMyProperties(userId: $userId, limit: $limit, nextToken: $nextToken) {{
      items {{{PROPERTY_LIST_FIELDS}      }}
      nextToken
    }}
  }}
"""

LIST_PROPERTIES = f"""
  query ListProperties($filter: PropertyFilterInput, $limit: Int, $nextToken: String) {{
    listProperties(filter: $filter, limit: $limit, nextToken: $nextToken) {{
      items {{{PROPERTY_LIST_FIELDS}      }}
      nextToken
    }}
  }}
"""

GET_PROPERTY = f"""
  query GetProperty($id: ID!) {{
    getProperty(id: $id) {{{PROPERTY_FIELDS}    }}
  }}
"""

GET_REPORT_STATUS = """
  query GetReportStatus($executionArn: String!) {
    getReportStatus(executionArn: $executionArn) {
      status
      reportId
      signedUrl
      s3Key
      error
    }
  }
"""

LIST_MY_REPORTS = """
  query ListMyReports($limit: Int, $nextToken: String) {
    listMyReports(limit: $limit, nextToken: $nextToken) {
      items {
        reportId
        fileName
        reportType
        propertyTitle
        createdAt
        size
        signedUrl
        s3Key
      }
      nextToken
    }
  }
"""

LIST_PENDING_PROPERTIES = f"""
  query ListPendingProperties($limit: Int, $nextToken: String) {{
    listPendingProperties(limit: $limit, nextToken: $nextToken) {{
      items {{{PENDING_PROPERTY_FIELDS}      }}
      nextToken
    }}
  }}
"""
