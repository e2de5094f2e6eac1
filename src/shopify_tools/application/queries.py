"""GraphQL documents sent to the Shopify Admin API."""

from __future__ import annotations

PRODUCT_IMAGES_FRAGMENT = """
fragment ProductImages on Image {
  src
  height
  width
}
"""

PRODUCT_VARIANTS_FRAGMENT = """
fragment ProductVariants on ProductVariant {
  id
  title
  price
  sku
  image {
    ...ProductImages
  }
  availableForSale
  inventoryPolicy
  inventoryItem {
    id
  }
  selectedOptions {
    name
    value
  }
}
"""

PRODUCT_FRAGMENT = (
    """
fragment Product on Product {
  id
  handle
  title
  description
  status
  vendor
  productType
  tags
  publishedAt
  updatedAt
  options {
    id
    name
    values
  }
  images(first: 20) {
    edges {
      node {
        ...ProductImages
      }
    }
  }
  variants(first: 250) {
    edges {
      node {
        ...ProductVariants
      }
    }
  }
}
"""
    + PRODUCT_IMAGES_FRAGMENT
    + PRODUCT_VARIANTS_FRAGMENT
)

ORDER_FRAGMENT = """
fragment Order on Order {
  id
  name
  createdAt
  displayFinancialStatus
  displayFulfillmentStatus
  email
  phone
  note
  tags
  totalPriceSet {
    shopMoney {
      amount
      currencyCode
    }
  }
  subtotalPriceSet {
    shopMoney {
      amount
      currencyCode
    }
  }
  totalTaxSet {
    shopMoney {
      amount
      currencyCode
    }
  }
  customer {
    id
    email
    firstName
    lastName
  }
  shippingAddress {
    address1
    address2
    city
    country
    provinceCode
    zip
    phone
  }
  lineItems(first: 50) {
    nodes {
      id
      title
      quantity
      originalTotalSet {
        shopMoney {
          amount
          currencyCode
        }
      }
      variant {
        id
        title
        sku
      }
    }
  }
}
"""

WEBHOOK_FIELDS = """
  id
  topic
  endpoint {
    __typename
    ... on WebhookHttpEndpoint {
      callbackUrl
    }
  }
"""

SHOP_CURRENCY_QUERY = """
query shopCurrency {
  shop {
    currencyCode
  }
}
"""

PRODUCTS_QUERY = (
    """
query products($first: Int!, $after: String, $query: String) {
  products(first: $first, after: $after, query: $query) {
    edges {
      node {
        ...Product
      }
    }
    pageInfo {
      hasNextPage
      endCursor
    }
  }
}
"""
    + PRODUCT_FRAGMENT
)

PRODUCTS_BY_COLLECTION_QUERY = (
    """
query productsByCollection($id: ID!, $first: Int!, $after: String) {
  collection(id: $id) {
    id
    title
    products(first: $first, after: $after) {
      edges {
        node {
          ...Product
        }
      }
      pageInfo {
        hasNextPage
        endCursor
      }
    }
  }
}
"""
    + PRODUCT_FRAGMENT
)

PRODUCTS_BY_IDS_QUERY = (
    """
query productsByIds($ids: [ID!]!) {
  nodes(ids: $ids) {
    __typename
    ... on Product {
      ...Product
    }
  }
}
"""
    + PRODUCT_FRAGMENT
)

VARIANTS_BY_IDS_QUERY = (
    """
query variantsByIds($ids: [ID!]!) {
  nodes(ids: $ids) {
    __typename
    ... on ProductVariant {
      ...ProductVariants
      product {
        id
        title
        handle
      }
    }
  }
}
"""
    + PRODUCT_IMAGES_FRAGMENT
    + PRODUCT_VARIANTS_FRAGMENT
)

PRODUCT_CREATE_MUTATION = (
    """
mutation productCreate($input: ProductInput!) {
  productCreate(input: $input) {
    product {
      ...Product
    }
    userErrors {
      field
      message
    }
  }
}
"""
    + PRODUCT_FRAGMENT
)

PRODUCT_UPDATE_MUTATION = (
    """
mutation productUpdate($input: ProductInput!) {
  productUpdate(input: $input) {
    product {
      ...Product
    }
    userErrors {
      field
      message
    }
  }
}
"""
    + PRODUCT_FRAGMENT
)

INVENTORY_ADJUST_MUTATION = """
mutation inventoryAdjustQuantities($input: InventoryAdjustQuantitiesInput!) {
  inventoryAdjustQuantities(input: $input) {
    inventoryAdjustmentGroup {
      reason
      changes {
        name
        delta
        quantityAfterChange
      }
    }
    userErrors {
      field
      message
    }
  }
}
"""

INVENTORY_SET_ON_HAND_MUTATION = """
mutation inventorySetOnHandQuantities($input: InventorySetOnHandQuantitiesInput!) {
  inventorySetOnHandQuantities(input: $input) {
    inventoryAdjustmentGroup {
      reason
      changes {
        name
        delta
        quantityAfterChange
      }
    }
    userErrors {
      field
      message
    }
  }
}
"""

TAGS_ADD_MUTATION = """
mutation tagsAdd($id: ID!, $tags: [String!]!) {
  tagsAdd(id: $id, tags: $tags) {
    node {
      id
    }
    userErrors {
      field
      message
    }
  }
}
"""

ORDERS_QUERY = (
    """
query orders(
  $first: Int!
  $after: String
  $query: String
  $sortKey: OrderSortKeys
  $reverse: Boolean
) {
  orders(first: $first, after: $after, query: $query, sortKey: $sortKey, reverse: $reverse) {
    edges {
      node {
        ...Order
      }
    }
    pageInfo {
      hasNextPage
      endCursor
    }
  }
}
"""
    + ORDER_FRAGMENT
)

ORDER_QUERY = (
    """
query order($id: ID!) {
  order(id: $id) {
    ...Order
  }
}
"""
    + ORDER_FRAGMENT
)

DRAFT_ORDER_CREATE_MUTATION = """
mutation draftOrderCreate($input: DraftOrderInput!) {
  draftOrderCreate(input: $input) {
    draftOrder {
      id
      name
    }
    userErrors {
      field
      message
    }
  }
}
"""

DRAFT_ORDER_COMPLETE_MUTATION = """
mutation draftOrderComplete($id: ID!) {
  draftOrderComplete(id: $id) {
    draftOrder {
      id
      name
      order {
        id
      }
    }
    userErrors {
      field
      message
    }
  }
}
"""

DISCOUNT_CODE_BASIC_CREATE_MUTATION = """
mutation discountCodeBasicCreate($basicCodeDiscount: DiscountCodeBasicInput!) {
  discountCodeBasicCreate(basicCodeDiscount: $basicCodeDiscount) {
    codeDiscountNode {
      id
      codeDiscount {
        ... on DiscountCodeBasic {
          title
          codes(first: 1) {
            nodes {
              code
            }
          }
        }
      }
    }
    userErrors {
      field
      code
      message
    }
  }
}
"""

DISCOUNT_CODE_DELETE_MUTATION = """
mutation discountCodeDelete($id: ID!) {
  discountCodeDelete(id: $id) {
    deletedCodeDiscountId
    userErrors {
      field
      code
      message
    }
  }
}
"""

WEBHOOK_SUBSCRIPTION_CREATE_MUTATION = (
    """
mutation webhookSubscriptionCreate(
  $topic: WebhookSubscriptionTopic!
  $webhookSubscription: WebhookSubscriptionInput!
) {
  webhookSubscriptionCreate(topic: $topic, webhookSubscription: $webhookSubscription) {
    webhookSubscription {
"""
    + WEBHOOK_FIELDS
    + """
    }
    userErrors {
      field
      message
    }
  }
}
"""
)

WEBHOOK_SUBSCRIPTIONS_QUERY = (
    """
query webhookSubscriptions($topics: [WebhookSubscriptionTopic!], $callbackUrl: URL) {
  webhookSubscriptions(first: 100, topics: $topics, callbackUrl: $callbackUrl) {
    edges {
      node {
"""
    + WEBHOOK_FIELDS
    + """
      }
    }
  }
}
"""
)

WEBHOOK_SUBSCRIPTION_DELETE_MUTATION = """
mutation webhookSubscriptionDelete($id: ID!) {
  webhookSubscriptionDelete(id: $id) {
    deletedWebhookSubscriptionId
    userErrors {
      field
      message
    }
  }
}
"""

VARIANT_PRODUCTS_QUERY = """
query variantProducts($ids: [ID!]!) {
  nodes(ids: $ids) {
    __typename
    ... on ProductVariant {
      id
      product {
        id
      }
    }
  }
}
"""

PRODUCT_VARIANTS_BULK_CREATE_MUTATION = """
mutation productVariantsBulkCreate($productId: ID!, $variants: [ProductVariantsBulkInput!]!) {
  productVariantsBulkCreate(productId: $productId, variants: $variants) {
    productVariants {
      id
      title
      price
    }
    userErrors {
      field
      message
    }
  }
}
"""

PRODUCT_VARIANTS_BULK_UPDATE_MUTATION = """
mutation productVariantsBulkUpdate($productId: ID!, $variants: [ProductVariantsBulkInput!]!) {
  productVariantsBulkUpdate(productId: $productId, variants: $variants) {
    productVariants {
      id
      title
      price
    }
    userErrors {
      field
      message
    }
  }
}
"""

PRODUCT_VARIANTS_BULK_DELETE_MUTATION = """
mutation productVariantsBulkDelete($productId: ID!, $variantsIds: [ID!]!) {
  productVariantsBulkDelete(productId: $productId, variantsIds: $variantsIds) {
    product {
      id
    }
    userErrors {
      field
      message
    }
  }
}
"""

METAFIELDS_SET_MUTATION = """
mutation metafieldsSet($metafields: [MetafieldsSetInput!]!) {
  metafieldsSet(metafields: $metafields) {
    metafields {
      id
      namespace
      key
      value
      type
    }
    userErrors {
      field
      message
    }
  }
}
"""

PRODUCT_METAFIELD_QUERY = """
query productMetafield($id: ID!, $namespace: String!, $key: String!) {
  product(id: $id) {
    id
    metafield(namespace: $namespace, key: $key) {
      id
    }
  }
}
"""

METAFIELD_DELETE_MUTATION = """
mutation metafieldDelete($input: MetafieldDeleteInput!) {
  metafieldDelete(input: $input) {
    deletedId
    userErrors {
      field
      message
    }
  }
}
"""

COLLECTION_ADD_PRODUCTS_MUTATION = """
mutation collectionAddProducts($id: ID!, $productIds: [ID!]!) {
  collectionAddProducts(id: $id, productIds: $productIds) {
    collection {
      id
      title
    }
    userErrors {
      field
      message
    }
  }
}
"""

COLLECTION_REMOVE_PRODUCTS_MUTATION = """
mutation collectionRemoveProducts($id: ID!, $productIds: [ID!]!) {
  collectionRemoveProducts(id: $id, productIds: $productIds) {
    job {
      id
      done
    }
    userErrors {
      field
      message
    }
  }
}
"""

PRODUCT_CREATE_MEDIA_MUTATION = """
mutation productCreateMedia($productId: ID!, $media: [CreateMediaInput!]!) {
  productCreateMedia(productId: $productId, media: $media) {
    media {
      id
      alt
      mediaContentType
      status
    }
    mediaUserErrors {
      field
      message
    }
  }
}
"""

PRODUCT_UPDATE_MEDIA_MUTATION = """
mutation productUpdateMedia($productId: ID!, $media: [UpdateMediaInput!]!) {
  productUpdateMedia(productId: $productId, media: $media) {
    media {
      id
      alt
      mediaContentType
      status
    }
    mediaUserErrors {
      field
      message
    }
  }
}
"""

PRODUCT_DELETE_MEDIA_MUTATION = """
mutation productDeleteMedia($productId: ID!, $mediaIds: [ID!]!) {
  productDeleteMedia(productId: $productId, mediaIds: $mediaIds) {
    deletedMediaIds
    mediaUserErrors {
      field
      message
    }
  }
}
"""
